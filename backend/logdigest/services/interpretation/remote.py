"""
Remote interpretation venue: the same digest call, run inside an AWS Lambda.

The function receives {"digest": [...], "apiKey": "..."} and answers either
with the JSON array directly or with an API Gateway style
{"statusCode": ..., "body": "<json>"} envelope.
"""
import json
from typing import Any, List, Optional, Sequence

import boto3

from logdigest.core.config import Settings, settings as default_settings
from logdigest.core.logging import get_logger
from logdigest.errors import ConfigurationError, InterpretationError
from logdigest.models.schemas import AISummary
from logdigest.services.log_pipeline.digest import DigestEntry
from .response import map_summaries

logger = get_logger(__name__)


def get_lambda_client(config: Optional[Settings] = None):
    """Create a Lambda client from explicit settings rather than the ambient AWS chain."""
    config = config or default_settings
    return boto3.client(
        service_name="lambda",
        region_name=config.aws_region,
        aws_access_key_id=config.aws_access_key_id,
        aws_secret_access_key=config.aws_secret_access_key,
    )


def unwrap_body(payload: Any) -> Any:
    """Peel an API Gateway envelope; body may be a JSON string or already decoded."""
    if isinstance(payload, dict) and "body" in payload:
        status = payload.get("statusCode")
        body = payload["body"]
        if isinstance(body, str):
            body = json.loads(body)
        if isinstance(status, int) and status >= 400:
            error = body.get("error") if isinstance(body, dict) else body
            raise InterpretationError(f"Lambda returned {status}: {error}", venue="remote")
        return body
    return payload


def summarize_digest_remote(
    digest: Sequence[DigestEntry],
    api_key: str,
    config: Optional[Settings] = None,
    client=None,
) -> List[AISummary]:
    config = config or default_settings
    if not config.lambda_function_name:
        raise ConfigurationError("Remote function name is not configured", config_key="lambda_function_name")

    client = client or get_lambda_client(config)
    logger.info(f"[Analysis] Delegating to AWS Lambda: {config.lambda_function_name}")

    payload = {
        "digest": [e.to_dict() for e in digest],
        "apiKey": api_key,
    }
    response = client.invoke(
        FunctionName=config.lambda_function_name,
        Payload=json.dumps(payload).encode("utf-8"),
    )

    if response.get("FunctionError"):
        raise InterpretationError(f"Lambda execution failed: {response['FunctionError']}", venue="remote")

    raw = response["Payload"].read()
    try:
        body = unwrap_body(json.loads(raw))
    except json.JSONDecodeError as e:
        raise InterpretationError(f"Lambda returned invalid JSON: {e}", venue="remote") from e

    if not isinstance(body, list):
        raise InterpretationError("Lambda response was not a JSON array", venue="remote")

    return map_summaries(len(digest), body)
