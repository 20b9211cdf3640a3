from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from datetime import datetime, timezone

import httpx

from .criteria import DEFAULT_SELF_HOSTNAMES, PageContext, evaluate_all, parse_document
from .errors import AnalysisError, invalid_url_error, unknown_error
from .fetcher import fetch_document
from .models import AnalyzeResponse, CriterionResult, Tag
from .urls import UrlValidationError, normalize_url

logger = logging.getLogger(__name__)

TOTAL_CRITERIA = 27

# (tag name, criterion id) surfaced as highlights on every report.
_TAGGED_CRITERIA = (
    ("Color Contrast", "1.4.3"),
    ("Focus Appearance", "2.4.13"),
    ("Target Size", "2.5.8"),
    ("Authentication", "3.3.8"),
)


def overall_score(passed_count: int, total: int = TOTAL_CRITERIA) -> int:
    return min(100, round(passed_count / total * 100))


def build_tags(results: list[CriterionResult]) -> list[Tag]:
    by_id = {r.criterion_id: r for r in results}
    return [Tag(name=name, is_passed=by_id[cid].passed) for name, cid in _TAGGED_CRITERIA]


def generate_summary(passed_count: int, total: int, results: list[CriterionResult]) -> str:
    failed = ", ".join(r.name for r in results if not r.passed)

    if passed_count == total:
        return f"This website appears to meet all {total} WCAG success criteria we checked. Great job!"
    if passed_count >= total * 0.7:
        return f"This website provides good accessibility in most areas but needs improvements in {failed}."
    if passed_count >= total * 0.4:
        return f"This website has moderate accessibility issues and needs significant improvements in {failed}."
    return "This website has major accessibility issues and requires extensive work to comply with WCAG guidelines."


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_report(url: str, results: list[CriterionResult]) -> AnalyzeResponse:
    passed_count = sum(1 for r in results if r.passed)
    return AnalyzeResponse(
        url=url,
        timestamp=_iso_timestamp(),
        overall_score=overall_score(passed_count),
        passed_criteria=passed_count,
        total_criteria=TOTAL_CRITERIA,
        results=results,
        summary=generate_summary(passed_count, TOTAL_CRITERIA, results),
        tags=build_tags(results),
    )


async def analyze(
    url: str,
    *,
    timeout_ms: float | None = None,
    self_hostnames: Iterable[str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AnalyzeResponse:
    """Normalize, fetch, and check ``url`` against every criterion.

    Raises AnalysisError. Classified failures pass through unchanged; anything
    else, a failing check included, becomes UNKNOWN_ERROR and no partial
    report is produced.
    """
    t0 = time.perf_counter()
    try:
        try:
            normalized_url = normalize_url(url)
        except UrlValidationError as e:
            raise invalid_url_error(e.message) from e

        html = await fetch_document(normalized_url, timeout_ms, transport=transport)

        page = PageContext(
            url=normalized_url,
            self_hostnames=frozenset(h.lower() for h in self_hostnames)
            if self_hostnames is not None
            else DEFAULT_SELF_HOSTNAMES,
        )
        results = evaluate_all(parse_document(html), page)
        report = build_report(normalized_url, results)
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("Error analyzing %s", url)
        raise unknown_error() from e

    logger.info(
        "Analyzed %s: %d/%d passed in %dms",
        report.url,
        report.passed_criteria,
        report.total_criteria,
        int((time.perf_counter() - t0) * 1000),
    )
    return report
