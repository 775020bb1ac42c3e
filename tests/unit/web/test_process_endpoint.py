#!/usr/bin/env python3
"""
Unit tests for the SSE processing endpoint.
Tests the POST /api/process endpoint.
"""
import json

from tests.fixtures.candidate_fixtures import NODE_CANDIDATE_IDS


def _frames(response):
    return [
        json.loads(line[len("data: "):])
        for line in response.text.split("\n\n")
        if line.startswith("data: ")
    ]


class TestProcessEndpoint:

    def test_streams_progress_then_results(self, client, upload):
        session_id = upload().json()["session_id"]

        response = client.post("/api/process", json={"session_id": session_id, "query": "1 backend engineer with Node.js"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"

        frames = _frames(response)
        assert frames[0]["stage"] == "parsing"
        assert frames[0]["percentage"] == 0
        final = frames[-1]
        assert final["stage"] == "complete"
        assert final["percentage"] == 100
        assert len(final["results"]) == 1
        assert final["results"][0]["rank"] == 1
        assert final["results"][0]["candidate"]["id"] in NODE_CANDIDATE_IDS
        assert any(f["stage"] == "scoring" and f["currentBatch"] == 1 for f in frames)

    def test_zero_match_role_streams_warning(self, client, upload, llm):
        llm.handlers["query"] = json.dumps({"roles": [{"title": "Cobol Dev", "mustHaveSkills": ["COBOL"]}]})
        session_id = upload().json()["session_id"]

        frames = _frames(client.post("/api/process", json={"session_id": session_id, "query": "cobol"}))

        warning = next(f for f in frames if f["stage"] == "error")
        assert warning["level"] == "warning"
        assert warning["role"] == "Cobol Dev"
        assert frames[-1]["stage"] == "complete"
        assert frames[-1]["results"] == []

    def test_parse_failure_streams_error(self, client, upload, llm):
        llm.handlers["query"] = "I need more detail."
        session_id = upload().json()["session_id"]

        frames = _frames(client.post("/api/process", json={"session_id": session_id, "query": "someone good"}))

        assert frames[-1]["stage"] == "error"
        assert frames[-1]["level"] == "error"

    def test_unknown_session_is_404(self, client):
        response = client.post("/api/process", json={"session_id": "session_missing", "query": "x"})

        assert response.status_code == 404
        assert response.json()["type"] == "SessionNotFoundError"

    def test_blank_query_is_rejected(self, client, upload):
        session_id = upload().json()["session_id"]

        response = client.post("/api/process", json={"session_id": session_id, "query": ""})

        assert response.status_code == 422
