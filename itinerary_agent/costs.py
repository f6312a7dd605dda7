"""Parse free-form cost strings such as "JPY 400", "Rp 50000" or "$100"."""

import re
from typing import Optional

from .models import ParsedCost
from .settings import cfg_get


DEFAULT_CURRENCY = "IDR"

# 按优先级扫描原文中的货币符号
FALLBACK_SYMBOLS = ["$", "Rp", "€", "£", "₹"]

_SYMBOL = r"Rp|[$€£₹]"
_NUMBER = r"\d[\d,]*(?:\.\d+)?|\.\d+"

COST_RE = re.compile(
    rf"(?:(?P<lead_sym>{_SYMBOL})|(?<![A-Za-z])(?P<lead_code>[A-Za-z]{{2,3}}))?"
    rf"\s*(?P<amount>{_NUMBER})\s*"
    rf"(?:(?P<trail_sym>{_SYMBOL})|(?P<trail_code>[A-Za-z]{{2,3}})(?![A-Za-z]))?"
)


def _default_currency() -> str:
    return cfg_get("DEFAULT_CURRENCY") or DEFAULT_CURRENCY


def _pick_currency(m: "re.Match") -> str:
    # 前置币种优先于后置币种；字母代码统一转大写，符号原样保留
    for sym_key, code_key in (("lead_sym", "lead_code"), ("trail_sym", "trail_code")):
        if m.group(sym_key):
            return m.group(sym_key)
        if m.group(code_key):
            return m.group(code_key).upper()
    return ""


def parse_cost(text: Optional[str], default_currency: Optional[str] = None) -> Optional[ParsedCost]:
    """Extract amount and currency from a cost string.

    Returns None when the text holds no number (e.g. "Gratis"); this is an
    expected outcome, not an error.
    """
    if not text:
        return None

    m = COST_RE.search(text)
    if not m:
        return None

    try:
        amount = float(m.group("amount").replace(",", ""))
    except ValueError:
        return None

    currency = _pick_currency(m)
    if not currency:
        for sym in FALLBACK_SYMBOLS:
            if sym in text:
                currency = sym
                break
    if not currency:
        currency = default_currency or _default_currency()

    return ParsedCost(amount=amount, currency=currency)


def format_amount(amount: float, currency: str = "") -> str:
    """Format like "JPY 1,200" or "IDR 1,234.5" (grouped, at most 3 decimals)."""
    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return f"{currency} {text}".strip()
