"""
AWS Lambda entry point for the remote interpretation venue.

Deployed separately; the API side reaches it through remote.py.
"""
import json
from typing import Any, Dict

from logdigest.core.config import settings
from logdigest.core.logging import get_logger, setup_logging
from logdigest.errors import LogDigestError
from logdigest.services.log_pipeline.digest import DigestEntry
from .llm_client import summarize_digest

setup_logging()
logger = get_logger(__name__)


def _response(status: int, body: Any) -> Dict[str, Any]:
    return {"statusCode": status, "body": json.dumps(body)}


def handler(event: Dict[str, Any], context: Any = None, llm_client=None) -> Dict[str, Any]:
    logger.info(f"Received event with keys: {sorted(event.keys()) if isinstance(event, dict) else type(event)}")

    try:
        # API Gateway / function URLs often wrap the body in a string
        body = event.get("body", event) if isinstance(event, dict) else event
        if isinstance(body, str):
            body = json.loads(body)
        if not isinstance(body, dict):
            body = {}

        digest = body.get("digest")
        api_key = body.get("apiKey")

        if not isinstance(digest, list):
            return _response(400, {"error": 'Invalid input. Expected "digest" array.'})

        if not api_key:
            return _response(401, {"error": "API Key is required."})

        entries = [DigestEntry.from_dict(d) for d in digest if isinstance(d, dict)]
        summaries = summarize_digest(entries, api_key=api_key, config=settings, client=llm_client)

        return _response(200, [
            {"index": i, "humanMeaning": s.human_meaning, "severityScore": s.severity_score}
            for i, s in enumerate(summaries, start=1)
        ])

    except LogDigestError as e:
        logger.error(f"Lambda Error: {e.message}")
        return _response(500, {"error": e.message})
    except Exception as e:
        logger.error(f"Lambda Error: {e}", exc_info=True)
        return _response(500, {"error": str(e)})
