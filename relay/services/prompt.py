"""
loads per-route system prompts from relay/prompts/<route>_system.txt
routes without a prompt file send the conversation as-is
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

PROMPTS_DIR = Path(__file__).resolve().parents[1] / "prompts"


@lru_cache(maxsize=None)
def load_system_prompt(route: str) -> Optional[str]:
    p = PROMPTS_DIR / f"{route}_system.txt"
    if not p.is_file():
        return None
    text = p.read_text(encoding="utf-8").strip()
    return text or None
