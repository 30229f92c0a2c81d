"""Document-level rollups: risk score, exposures, register counts, executive summary.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2026-01-19
Version: 1.0.0
License: MIT
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from models.field_set import FieldSet
from models.score_factor import ScoreBreakdown, ScoreFactor
from utils.score_calculator import build_score_breakdown, exposure_ratings, overall_rating

from .module_service import EXPOSURES_KEY, AssessmentService
from .recommendation_service import RecommendationStore

logger = logging.getLogger(__name__)

DOC_CONTROL_KEY = "RE_01_DOC_CONTROL"


def _format_date(value: Optional[str]) -> str:
    """ISO date -> "19 October 2026"; today when missing or unparseable."""
    parsed: date = date.today()
    if value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            logger.warning(f"Unparseable assessment date {value!r}, using today")
    return f"{parsed.day} {parsed.strftime('%B %Y')}"


def _join_contributors(contributors: List[ScoreFactor]) -> str:
    parts = [f"{(factor.label or factor.canonical_key).lower()} ({factor.score:.1f})" for factor in contributors]
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return f"{', '.join(parts[:-1])}, and {parts[-1]}"


class SummaryService:
    """Cross-module reporting for one assessment document."""

    def __init__(self, assessment_service: AssessmentService, store: RecommendationStore):
        self.assessment_service = assessment_service
        self.store = store

    def risk_score(self, document_id: str) -> ScoreBreakdown:
        return build_score_breakdown(self.assessment_service.risk_engineering_data(document_id))

    def exposures(self, document_id: str) -> Optional[Dict[str, Optional[int]]]:
        """RE-07 pillars, None when the document has no exposures module."""
        record = self.assessment_service.gateway.find(document_id, EXPOSURES_KEY)
        if record is None:
            return None
        ratings = FieldSet(record.data).nested("ratings")
        return exposure_ratings(ratings, include_other="exposures_other" in ratings)

    def module_outcomes(self, document_id: str) -> List[Dict[str, Any]]:
        return [
            {
                'instance_id': record.id,
                'module_key': record.module_key,
                'outcome': record.outcome.value if record.outcome else None,
                'completed_at': record.completed_at,
            }
            for record in self.assessment_service.gateway.list_for_document(document_id)
        ]

    def executive_summary(
        self,
        document_id: str,
        breakdown: Optional[ScoreBreakdown] = None,
        recommendation_counts: Optional[Dict[str, int]] = None,
    ) -> str:
        """Plain-text executive summary paragraph for the draft report."""
        breakdown = breakdown or self.risk_score(document_id)
        counts = recommendation_counts or self.store.summary(document_id)['by_priority']

        doc_control = self.assessment_service.gateway.find(document_id, DOC_CONTROL_KEY)
        doc_data = FieldSet(doc_control.data if doc_control else {})
        site_name = doc_data.text("site_name").strip() or "the site"
        industry = (breakdown.industry_key or "unspecified").replace("_", " ")

        paragraphs = [
            f"This Risk Engineering assessment was undertaken on {_format_date(doc_data.text('assessment_date'))} "
            f"for {site_name}. The site has been evaluated against industry-specific risk criteria for the "
            f"{industry} sector, with a total risk score of {breakdown.total_score:.1f}."
        ]

        if breakdown.top_contributors:
            paragraphs.append(
                f"The principal risk contributors identified are {_join_contributors(breakdown.top_contributors)}."
            )

        total = sum(counts.values())
        if total > 0:
            parts = [f"{counts[p]} {p}" for p in ("critical", "high", "medium", "low") if counts.get(p)]
            text = (
                f"The assessment has identified {total} recommendation{'s' if total > 1 else ''} "
                f"({', '.join(parts)} priority)."
            )
            if counts.get("critical") or counts.get("high"):
                text += (" Immediate attention should be given to high and critical priority "
                         "recommendations to reduce overall risk exposure.")
            elif counts.get("medium"):
                text += (" Implementation of medium priority recommendations will further enhance "
                         "risk management and operational resilience.")
            else:
                text += (" Addressing these lower priority recommendations will support continuous "
                         "improvement in risk management practices.")
            paragraphs.append(text)
        else:
            paragraphs.append(
                "No specific recommendations have been raised at this time. Continued monitoring and "
                "maintenance of existing risk controls is advised to ensure sustained protection of "
                "property and business continuity."
            )

        paragraphs.append(
            "Full details of the assessment methodology, individual risk factor evaluations, and "
            "detailed recommendations are provided in the main body of this report."
        )
        return " ".join(paragraphs)

    def document_summary(self, document_id: str) -> Dict[str, Any]:
        """Everything the draft-outputs module shows for a document."""
        breakdown = self.risk_score(document_id)
        exposures = self.exposures(document_id)
        register = self.store.summary(document_id)

        pillars = [breakdown.pillar_rating]
        if exposures is not None:
            pillars.append(exposures['overall'])

        summary = {
            'document_id': document_id,
            'risk_score': breakdown,
            'exposures': exposures,
            'overall_rating': overall_rating(pillars),
            'recommendations': register,
            'modules': self.module_outcomes(document_id),
            'executive_summary': self.executive_summary(
                document_id, breakdown=breakdown, recommendation_counts=register['by_priority']
            ),
        }
        logger.info(f"Built summary for document {document_id} (overall rating {summary['overall_rating']})")
        return summary


# Made with Bob
