import os
import re
import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from openai import OpenAI, OpenAIError

from itstock.api.deps import get_controller
from itstock.logic.controller import InventoryController
from itstock.logic.shopping.list_builder import build_final_list
from itstock.utilities.config import OPENAI_MODEL
from itstock.utilities.constants import ADVICE_PROMPT_TEMPLATE, SOURCE_MANUAL
from itstock.utilities.validators import AdviceRequest

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "The purchase assistant is not available right now. Please try again later."
MISSING_KEY_MESSAGE = "Purchase assistant is not configured: set OPENAI_API_KEY in the environment."


class AdviceUnavailableError(RuntimeError):
    """The advice service cannot answer (missing credentials, API failure, empty reply)."""


# === Helper: Get OpenAI Client ===
def _get_openai_client():
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    api_key = os.environ.get("OPENAI_API_KEY")
    if not api_key:
        return None
    return OpenAI(api_key=api_key)


# === Prompt ===
def _format_entry(entry: Dict[str, Any]) -> str:
    note = f" [Note: {entry['note']}]" if entry.get('note') else ""
    source = "[Added manually]" if entry.get('source') == SOURCE_MANUAL else "[Low stock]"
    return f"- {entry['name']} (Qty: {entry['quantity']}){note} {source}"


def build_advice_prompt(entries: Iterable[Dict[str, Any]]) -> str:
    lines = "\n".join(_format_entry(e) for e in entries)
    return ADVICE_PROMPT_TEMPLATE.format(lines=lines)


def _strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model sometimes wraps HTML in."""
    text = re.sub(r"```(?:html)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


# === Advice ===
def request_purchase_advice(entries: List[Dict[str, Any]]) -> str:
    """Ask the model to review a purchase list. Raises AdviceUnavailableError on any failure."""
    client = _get_openai_client()
    if client is None:
        logger.warning("OPENAI_API_KEY not set, cannot request purchase advice.")
        raise AdviceUnavailableError(MISSING_KEY_MESSAGE)

    try:
        response = client.responses.create(
            model=OPENAI_MODEL,
            input=build_advice_prompt(entries),
        )
    except OpenAIError as e:
        logger.error("Purchase advice request failed: %s", e)
        raise AdviceUnavailableError(UNAVAILABLE_MESSAGE) from e

    advice = _strip_code_fences(response.output_text or "")
    if not advice:
        logger.warning("AI returned empty purchase advice")
        raise AdviceUnavailableError(UNAVAILABLE_MESSAGE)
    return advice


# === FastAPI Endpoint ===
router = APIRouter()


@router.post("/api/shopping-list/advice")
def purchase_advice(payload: Optional[AdviceRequest] = None,
                    controller: InventoryController = Depends(get_controller)):
    """Review the purchase list with the AI assistant. Never touches stock."""
    payload = payload or AdviceRequest()
    if payload.entries is not None:
        entries = [e.model_dump() for e in payload.entries]
    else:
        entries = build_final_list(controller.shopping_list(), controller.manual_list.items(),
                                   payload.overrides, payload.notes)
    if not entries:
        raise HTTPException(status_code=400, detail="Shopping list is empty")
    return {"advice": request_purchase_advice(entries), "count": len(entries)}
