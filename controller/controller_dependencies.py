# controller/controller_dependencies.py
from fastapi import Depends
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from core.entities import StructuralContract
from service.notification_service import NotificationService
from service.reasoning_service import ReasoningService

# Shared so tests can override it via app.dependency_overrides.
rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)
RATE_LIMITED = [Depends(rate_limiter)]


# Built at import so an invalid contract in the environment fails startup.
_CONTRACT = StructuralContract(
    section_count=settings.SECTION_COUNT,
    paragraphs_per_section=settings.PARAGRAPHS_PER_SECTION,
    min_words=settings.PARAGRAPH_MIN_WORDS,
    max_words=settings.PARAGRAPH_MAX_WORDS,
)


def get_contract() -> StructuralContract:
    return _CONTRACT


def get_reasoning_service(
    contract: StructuralContract = Depends(get_contract),
) -> ReasoningService:
    return ReasoningService(
        contract=contract,
        lenient_json=settings.LENIENT_JSON_EXTRACTION,
        excerpt_chars=settings.EVIDENCE_EXCERPT_CHARS,
    )


def get_notification_service() -> NotificationService:
    return NotificationService()
