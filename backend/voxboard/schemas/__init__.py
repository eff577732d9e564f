"""
Voxboard Backend - Pydantic Request/Response Schemas
=====================================================

Request models declare every field optional: a missing field is a business
validation failure reported by the service layer as HTTP 400, not a
FastAPI 422.

Response models are wrapped in the uniform envelope from `common`:
    success -> {"success": true, "message": ..., "data": ...}
    failure -> {"success": false, "error": ..., "message": ..., "request_id": ...}
"""
