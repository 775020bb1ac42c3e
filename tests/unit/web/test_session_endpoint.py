#!/usr/bin/env python3
"""
Unit tests for session inspection endpoints and the health check.
"""


def test_get_session_summary(client, upload):
    uploaded = upload().json()

    response = client.get(f"/api/session/{uploaded['session_id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["candidate_count"] == 10
    assert data["file_hash"] == uploaded["file_hash"]
    assert data["detected_fields"]["emailFields"] == ["email"]


def test_unknown_session_is_404(client):
    response = client.get("/api/session/session_missing")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_delete_session(client, upload):
    session_id = upload().json()["session_id"]

    assert client.delete(f"/api/session/{session_id}").status_code == 200
    assert client.get(f"/api/session/{session_id}").status_code == 404


def test_expired_session_is_404(client, upload, ctx):
    session_id = upload().json()["session_id"]
    session = ctx.session_store.get(session_id)
    ctx.session_store.set(session_id, session, ttl_minutes=-1)

    assert client.get(f"/api/session/{session_id}").status_code == 404


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
