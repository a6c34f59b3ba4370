import sys
import os
from unittest.mock import MagicMock

import pytest
import requests

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reviewer.client import NO_RESPONSE_TEXT, ReviewClient, ReviewFailure, ReviewSuccess


def make_response(status_code=200, body=None, invalid_json=False):
    response = MagicMock(status_code=status_code, ok=200 <= status_code < 400)
    if invalid_json:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = body
    return response


class TestReviewClient:
    @pytest.fixture
    def session(self):
        return MagicMock()

    @pytest.fixture
    def client(self, session):
        return ReviewClient(base_url="http://reviewer.test/", session=session)

    def test_posts_code_and_instruction(self, client, session):
        session.post.return_value = make_response(body={"text": "# Review"})

        result = client.review("print(1)", "Be strict")

        assert result == ReviewSuccess(text="# Review")
        args, kwargs = session.post.call_args
        assert args == ("http://reviewer.test/api/codereview",)
        assert kwargs["json"] == {"code": "print(1)", "systemInstruction": "Be strict"}

    def test_missing_text_uses_placeholder(self, client, session):
        session.post.return_value = make_response(body={})

        assert client.review("x", "y") == ReviewSuccess(text=NO_RESPONSE_TEXT)

    def test_service_error_message_is_preferred(self, client, session):
        session.post.return_value = make_response(500, {"error": "Failed to generate content"})

        result = client.review("x", "y")

        assert result == ReviewFailure(message="Failed to generate content", status_code=500)

    def test_generic_message_without_error_body(self, client, session):
        session.post.return_value = make_response(502, invalid_json=True)

        assert client.review("x", "y") == ReviewFailure(
            message="Request failed with 502", status_code=502
        )

    def test_connection_error_is_a_failure(self, client, session):
        session.post.side_effect = requests.exceptions.ConnectionError("refused")

        result = client.review("x", "y")

        assert isinstance(result, ReviewFailure)
        assert "refused" in result.message
        assert result.status_code is None

    def test_invalid_success_body(self, client, session):
        session.post.return_value = make_response(200, invalid_json=True)

        result = client.review("x", "y")

        assert isinstance(result, ReviewFailure)
        assert result.status_code == 200
