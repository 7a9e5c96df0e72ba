# ENV vars: logging, limits, whitelist, CORS
import os
from dotenv import load_dotenv

from uiplan.content import TemplateContent
from uiplan.planner import PlannerOptions
from uiplan.schema import DEFAULT_WHITELIST, ComponentWhitelist

load_dotenv()


def _csv(value: str):
    return [v.strip() for v in value.split(",") if v.strip()]


class Config:
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()
    MAX_INTENT_LENGTH = int(os.getenv("MAX_INTENT_LENGTH", "2000"))
    # Comma list of kinds; empty means the full catalogue
    COMPONENT_WHITELIST = _csv(os.getenv("COMPONENT_WHITELIST", ""))
    CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"))
    MODAL_INPUT_COUNT = int(os.getenv("MODAL_INPUT_COUNT", "2"))
    DEFAULT_CARD_TITLE = os.getenv("DEFAULT_CARD_TITLE", "Welcome")


def whitelist_from_config() -> ComponentWhitelist:
    if not Config.COMPONENT_WHITELIST:
        return DEFAULT_WHITELIST
    return ComponentWhitelist.restricted_to(Config.COMPONENT_WHITELIST)


def planner_options() -> PlannerOptions:
    content = TemplateContent(
        default_title=Config.DEFAULT_CARD_TITLE,
        settings_input_count=Config.MODAL_INPUT_COUNT,
    )
    return PlannerOptions(
        whitelist=whitelist_from_config(),
        content=content,
        max_intent_length=Config.MAX_INTENT_LENGTH,
    )
