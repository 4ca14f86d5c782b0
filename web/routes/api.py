"""JSON API routes for channel/video analysis, history lookup and AI helpers."""

from __future__ import annotations

import logging

from flask import Blueprint, abort, current_app, jsonify, request

from tubescan.ai_client import SUPPORTED_LANGUAGES, AiClient, AiSettings
from tubescan.errors import AiRequestError, DataSourceError, InvalidReference
from web.services.analysis_runner import run_analysis
from web.services.serializers import history_to_dict
from web.services.storage import AnalysisStorage

api_bp = Blueprint("api", __name__)
logger = logging.getLogger(__name__)



def _error(message: str, status: int):
    return jsonify({"message": message}), status



def _json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}



def _ai_client(payload: dict) -> AiClient:
    api_key = (payload.get("aiApiKey") or current_app.config.get("AI_API_KEY") or "").strip()
    if not api_key:
        abort(400, description="An AI API key is required")

    language = payload.get("language") or current_app.config.get("AI_LANGUAGE", "en")
    if language not in SUPPORTED_LANGUAGES:
        abort(400, description=f"Unsupported language: {language}")

    settings = AiSettings(
        api_key=api_key,
        model=payload.get("model") or current_app.config["AI_MODEL"],
        language=language,
    )
    return AiClient(settings, base_url=current_app.config["AI_BASE_URL"])


@api_bp.errorhandler(InvalidReference)
def handle_invalid_reference(exc):
    return _error(str(exc), 400)


@api_bp.errorhandler(DataSourceError)
def handle_data_source_error(exc):
    logger.warning("YouTube data source error (%s): %s", exc.status, exc)
    return _error(str(exc), exc.status)


@api_bp.errorhandler(AiRequestError)
def handle_ai_error(exc):
    return _error(str(exc), 502)


@api_bp.post("/api/analyze")
def analyze():
    payload = _json_body()
    url = (payload.get("url") or "").strip()
    if not url:
        return _error("URL is required", 400)

    api_key = (payload.get("apiKey") or current_app.config.get("YOUTUBE_API_KEY") or "").strip()
    if not api_key:
        return _error("A YouTube API key is required", 400)

    result = run_analysis(
        url,
        api_key,
        max_videos=current_app.config["MAX_VIDEOS"],
        top_n=current_app.config["TOP_VIDEOS"],
        logger=logger.info,
    )
    entry = AnalysisStorage().save_analysis(url, result)

    response = result.to_dict()
    response["historyId"] = entry.id
    return jsonify(response)


@api_bp.get("/api/history")
def list_history():
    limit = request.args.get("limit", type=int) or current_app.config["HISTORY_LIMIT"]
    entries = AnalysisStorage().get_recent_analyses(limit=limit)
    return jsonify({"items": [history_to_dict(entry) for entry in entries], "count": len(entries)})


@api_bp.get("/api/history/<int:analysis_id>")
def history_detail(analysis_id: int):
    entry = AnalysisStorage().get_analysis_by_id(analysis_id)
    if entry is None:
        abort(404, description="Analysis not found")
    return jsonify(history_to_dict(entry, include_result=True))


@api_bp.get("/api/history/youtube/<youtube_id>")
def history_by_youtube_id(youtube_id: str):
    entry = AnalysisStorage().get_analysis_by_youtube_id(youtube_id)
    if entry is None:
        abort(404, description="Analysis not found")
    return jsonify(history_to_dict(entry, include_result=True))


@api_bp.post("/api/ai/seo")
def ai_seo():
    payload = _json_body()
    title = (payload.get("title") or "").strip()
    if not title:
        return _error("title is required", 400)

    hashtags = payload.get("hashtags") or []
    if isinstance(hashtags, str):
        hashtags = hashtags.split()

    analysis = _ai_client(payload).analyze_seo(title, payload.get("description") or "", hashtags)
    return jsonify({"analysis": analysis})


@api_bp.post("/api/ai/parody")
def ai_parody():
    payload = _json_body()
    caption = (payload.get("caption") or "").strip()
    if not caption:
        return _error("caption is required", 400)
    return jsonify({"parody": _ai_client(payload).generate_parody(caption)})


@api_bp.post("/api/ai/caption-advice")
def ai_caption_advice():
    payload = _json_body()
    caption = (payload.get("caption") or "").strip()
    if not caption:
        return _error("caption is required", 400)
    return jsonify({"advice": _ai_client(payload).analyze_caption_optimization(caption)})
