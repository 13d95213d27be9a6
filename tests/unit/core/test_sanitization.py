# tests/unit/core/test_sanitization.py
import json

import pytest
from flask import Flask, request, jsonify

from casetrack.core.security.sanitization import RequestSanitizer, sanitize_request


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["MAX_CONTENT_LENGTH"] = 10 * 1024 * 1024

    @app.route("/api/test", methods=["POST"])
    @sanitize_request()
    def echo():
        if request.is_json:
            return jsonify(request.get_json())
        return jsonify(dict(request.form))

    @app.route("/api/documents", methods=["POST"])
    @sanitize_request(exempt_paths=[r"/api/documents.*"])
    def exempt_echo():
        return jsonify(request.get_json())

    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_plain_text_is_stored_as_sent(client):
    data = {"name": "Smith & Sons <Holdings>", "identification": "1790000000001"}

    result = client.post("/api/test", json=data).get_json()

    assert result == data


def test_passwords_are_untouched(client):
    data = {"username": "jdoe", "password": "p@ss<word>123\x01"}

    result = client.post("/api/test", json=data).get_json()

    assert result["password"] == "p@ss<word>123\x01"


def test_rich_text_fields_are_cleaned(client):
    data = {
        "procedural_summary": "<img src=x onerror=alert(1)>Demanda presentada",
        "procedural_progress": "<script>x</script>Citacion",
    }

    result = client.post("/api/test", json=data).get_json()

    assert result["procedural_summary"] == "Demanda presentada"
    assert "<script>" not in result["procedural_progress"]


def test_allowed_html_tags(client):
    data = {"description": "<p>Audiencia <strong>urgente</strong> <em>hoy</em></p><script>x</script>"}

    result = client.post("/api/test", json=data).get_json()

    assert "<p>" in result["description"]
    assert "<strong>" in result["description"]
    assert "<em>" in result["description"]
    assert "<script>" not in result["description"]


def test_nested_rich_text(client):
    data = {"activity": {"description": "<script>x</script>ok"}, "notes": ["a < b", 3]}

    result = client.post("/api/test", json=data).get_json()

    assert "<script>" not in result["activity"]["description"]
    assert result["notes"] == ["a < b", 3]


def test_null_bytes_are_removed(client):
    result = client.post("/api/test", json={"name": "Juan\x00Perez\x00"}).get_json()
    assert result["name"] == "JuanPerez"


def test_unsupported_content_type(client):
    response = client.post("/api/test", data=json.dumps({"a": 1}), content_type="application/xml")
    assert response.status_code == 415


def test_oversized_body(client):
    response = client.post("/api/test", json={"data": "x" * (11 * 1024 * 1024)})
    assert response.status_code == 413


def test_invalid_json(client):
    response = client.post("/api/test", data="invalid{json", content_type="application/json")
    assert response.status_code == 400


def test_form_data(client):
    data = {"description": "<script>alert('x')</script>nota", "email": "juan@example.com"}

    response = client.post("/api/test", data=data, content_type="application/x-www-form-urlencoded")

    result = response.get_json()
    assert "<script>" not in result["description"]
    assert result["email"] == "juan@example.com"


def test_exempt_paths_are_untouched(client):
    data = {"file_data": "PHNjcmlwdD4=", "description": "<script>x</script>"}

    result = client.post("/api/documents", json=data).get_json()

    assert result == data


class TestRequestSanitizer:
    def test_control_characters(self):
        assert RequestSanitizer().sanitize_string("a\x07b\nc\td") == "ab\nc\td"

    def test_non_string_values_pass_through(self):
        assert RequestSanitizer().sanitize({"n": 1, "ok": True, "none": None}) == {
            "n": 1,
            "ok": True,
            "none": None,
        }

    def test_content_type_parameters_are_ignored(self):
        assert RequestSanitizer().validate_content_type("application/json; charset=utf-8")
