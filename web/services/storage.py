"""Analysis history storage backed by the SQLAlchemy session."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import desc

from tubescan.models import AnalysisResult
from web.db import SessionLocal
from web.models import AnalysisHistory

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10


class AnalysisStorage:
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def save_analysis(self, url: str, result: AnalysisResult) -> AnalysisHistory:
        db_session = self.session_factory()
        try:
            entry = AnalysisHistory(
                youtube_id=result.youtube_id,
                url=url,
                analysis_type=result.type,
                title=(result.title or "")[:255],
                overall_score=result.seo_analysis.overall_score,
                result=result.to_dict(),
            )
            db_session.add(entry)
            db_session.commit()
            db_session.refresh(entry)
            logger.info("Stored %s analysis %s for %s", entry.analysis_type, entry.id, entry.youtube_id)
            return entry
        except Exception:
            db_session.rollback()
            raise
        finally:
            db_session.close()

    def get_analysis_by_id(self, analysis_id: int) -> Optional[AnalysisHistory]:
        db_session = self.session_factory()
        try:
            return db_session.query(AnalysisHistory).filter(AnalysisHistory.id == analysis_id).one_or_none()
        finally:
            db_session.close()

    def get_recent_analyses(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[AnalysisHistory]:
        db_session = self.session_factory()
        try:
            return (
                db_session.query(AnalysisHistory)
                .order_by(desc(AnalysisHistory.created_at), desc(AnalysisHistory.id))
                .limit(max(limit, 0))
                .all()
            )
        finally:
            db_session.close()

    def get_analysis_by_youtube_id(self, youtube_id: str) -> Optional[AnalysisHistory]:
        """Latest stored analysis for a channel or video id."""
        db_session = self.session_factory()
        try:
            return (
                db_session.query(AnalysisHistory)
                .filter(AnalysisHistory.youtube_id == youtube_id)
                .order_by(desc(AnalysisHistory.created_at), desc(AnalysisHistory.id))
                .first()
            )
        finally:
            db_session.close()
