import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import openai
from openai import OpenAI

from .models import Citation
from .settings import cfg_get


logger = logging.getLogger(__name__)

# 上游在凭证/权限失效时返回的错误片段，调用方据此重置“已选择凭证”状态
CREDENTIAL_ERROR_MARKER = "Requested entity was not found."

DEFAULT_DEEPSEEK_MODEL = cfg_get("DEEPSEEK_MODEL", "deepseek-chat")
DEEPSEEK_API_BASE = cfg_get("DEEPSEEK_API_BASE", "https://api.deepseek.com")
DEFAULT_TEMPERATURE = 0.5


class GenerationError(RuntimeError):
    def __init__(self, message: str, credential: bool = False):
        super().__init__(message)
        self.message = message
        self.credential = credential


def is_credential_error(err: Exception) -> bool:
    if getattr(err, "credential", False):
        return True
    return CREDENTIAL_ERROR_MARKER in str(err)


@dataclass
class GenerationResponse:
    text: str
    citations: List[Citation] = field(default_factory=list)


SYSTEM_PROMPT = (
    "You are a professional, helpful, and creative Travel Planner AI. Your goal is to create detailed, "
    "day-by-day travel itineraries based on the user's input. Always use real-time, current information "
    "when suggesting activities, attractions, estimated costs, and opening hours. If you find a relevant "
    "website during your search, you must include its URL and title for checking prices or further information."
)

USER_PROMPT_TEMPLATE = """Please generate a {duration}-day travel itinerary for "{destination}", with a focus on "{interests}".

Respond strictly using structured Markdown. For each day, list activities with the following format:
**Hari {{Day Number}}**
- **{{Place/Activity Name}}**: {{Opening/Closing Hours}} | Estimasi Biaya: {{Estimated Cost in local currency}} | [Cek Harga]({{URL_placeholder_or_real_URL}})

Include at least 3-4 activities per day. Prioritize accuracy for opening hours and costs.
If a specific URL for checking prices isn't readily available for an activity, use "#" as the placeholder URL for the "Cek Harga" link.

Example for output structure:
**Hari 1**
- **Kinkaku-ji (Kuil Paviliun Emas)**: 09:00 - 17:00 | Estimasi Biaya: JPY 400 | [Cek Harga](https://www.kinkaku.jp/en/info/)
- **Arashiyama Bamboo Grove**: Buka 24 jam | Estimasi Biaya: Gratis | [Cek Harga](#)
- **Togetsukyo Bridge**: Buka 24 jam | Estimasi Biaya: Gratis | [Cek Harga](#)
- **Tenryu-ji Temple**: 08:30 - 17:00 | Estimasi Biaya: JPY 500-800 | [Cek Harga](https://www.tenryuji.com/en/guidance/)

Start the itinerary directly, do not add any introductory sentences before "**Hari 1**".
"""


def build_prompt(destination: str, duration_days: int, interests: str) -> List[Dict[str, str]]:
    user = USER_PROMPT_TEMPLATE.format(duration=duration_days, destination=destination, interests=interests)
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user},
    ]


def _api_key(api_key: Optional[str] = None) -> Optional[str]:
    return api_key or cfg_get("DEEPSEEK_API_KEY")


def llm_client_ok(api_key: Optional[str] = None) -> bool:
    return bool(_api_key(api_key))


def _get_client(api_key: Optional[str] = None) -> OpenAI:
    key = _api_key(api_key)
    if not key:
        raise GenerationError(
            "生成服务未配置，请在 config.py 填写 DEEPSEEK_API_KEY 或设置环境变量。",
            credential=True,
        )
    return OpenAI(api_key=key, base_url=DEEPSEEK_API_BASE)


def _temperature() -> float:
    try:
        return float(cfg_get("LLM_TEMPERATURE", DEFAULT_TEMPERATURE))
    except (TypeError, ValueError):
        return DEFAULT_TEMPERATURE


def _extract_citations(message) -> List[Citation]:
    # OpenAI 兼容接口的 url_citation 注释；没有则返回空列表
    citations = []
    for ann in getattr(message, "annotations", None) or []:
        if getattr(ann, "type", None) != "url_citation":
            continue
        cite = ann.url_citation
        citations.append(Citation(
            uri=cite.url,
            title=getattr(cite, "title", None),
            start_index=cite.start_index,
            end_index=cite.end_index,
        ))
    return citations


def generate_itinerary_response(
    destination: str,
    duration_days: int,
    interests: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> GenerationResponse:
    """Ask the generation service for a Markdown itinerary and its URL citations."""
    client = _get_client(api_key)
    model = model or DEFAULT_DEEPSEEK_MODEL
    logger.debug("requesting itinerary model=%s destination=%r days=%s", model, destination, duration_days)
    try:
        resp = client.chat.completions.create(
            model=model,
            temperature=_temperature(),
            messages=build_prompt(destination, duration_days, interests),
        )
    except (openai.AuthenticationError, openai.PermissionDeniedError, openai.NotFoundError) as e:
        logger.error("generation service rejected credentials: %s", e)
        raise GenerationError(f"Failed to get response from AI: {e}", credential=True) from e
    except openai.OpenAIError as e:
        logger.error("generation service error: %s", e)
        raise GenerationError(f"Failed to get response from AI: {e}") from e

    message = resp.choices[0].message if resp.choices else None
    text = message.content if message is not None else None
    if not text:
        raise GenerationError("Failed to get response from AI: No text content received from the generation service.")
    return GenerationResponse(text=text, citations=_extract_citations(message))


def generate_itinerary_text(destination: str, duration_days: int, interests: str, api_key: Optional[str] = None) -> str:
    return generate_itinerary_response(destination, duration_days, interests, api_key=api_key).text
