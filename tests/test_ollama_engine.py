"""
Tests for OllamaEngine.

These tests verify:
1. reload() asks Ollama to load the model and reports failures as ModelLoadError
2. complete() sends a non-streaming chat request with the sampling options
3. Transport and status failures surface as CompletionError with the server text
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from pdf_summarizer.ai import OllamaEngine
from pdf_summarizer.errors import CompletionError, ModelLoadError, NotInitializedError


def _response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data if json_data is not None else {}
    response.text = text
    return response


class TestReload:
    """Test model loading."""

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_reload_sets_active_model(self, mock_post):
        mock_post.return_value = _response(json_data={'done': True})
        engine = OllamaEngine(api_base="http://ollama:11434/")

        engine.reload("phi3:mini")

        assert engine.model_id == "phi3:mini"
        url = mock_post.call_args.args[0]
        payload = mock_post.call_args.kwargs['json']
        assert url == "http://ollama:11434/api/generate"
        assert payload == {"model": "phi3:mini", "prompt": "", "stream": False}

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_reload_reports_progress(self, mock_post):
        mock_post.return_value = _response()
        engine = OllamaEngine()
        progress = []
        engine.set_init_progress_callback(lambda text, fraction: progress.append((text, fraction)))

        engine.reload("gemma3:1b")

        assert progress == [("Loading gemma3:1b", 0.0), ("Loaded gemma3:1b", 1.0)]

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_unknown_model_raises(self, mock_post):
        mock_post.return_value = _response(404, {'error': "model 'nope' not found"})
        engine = OllamaEngine()

        with pytest.raises(ModelLoadError, match="not found"):
            engine.reload("nope")
        assert engine.model_id is None

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_connection_error_raises(self, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")
        engine = OllamaEngine()

        with pytest.raises(ModelLoadError, match="Cannot connect"):
            engine.reload("phi3:mini")


class TestComplete:
    """Test chat completion calls."""

    @pytest.fixture
    def engine(self):
        engine = OllamaEngine(api_base="http://localhost:11434", timeout=30)
        engine.model_id = "phi3:mini"
        return engine

    def test_requires_loaded_model(self):
        with pytest.raises(NotInitializedError):
            OllamaEngine().complete([{"role": "user", "content": "hi"}], 0.7, 10)

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_payload(self, mock_post, engine):
        mock_post.return_value = _response(json_data={
            'message': {'role': 'assistant', 'content': 'summary'},
            'eval_count': 12,
        })
        messages = [{"role": "user", "content": "Summarize this"}]

        result = engine.complete(messages, temperature=0.7, max_tokens=400)

        assert result.choice_text == "summary"
        assert result.tokens_used == 12
        url = mock_post.call_args.args[0]
        payload = mock_post.call_args.kwargs['json']
        assert url == "http://localhost:11434/api/chat"
        assert payload['model'] == "phi3:mini"
        assert payload['messages'] == messages
        assert payload['stream'] is False
        assert payload['options'] == {'temperature': 0.7, 'num_predict': 400}

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_missing_content_is_none(self, mock_post, engine):
        mock_post.return_value = _response(json_data={'done': True})

        result = engine.complete([{"role": "user", "content": "x"}], 0.7, 10)

        assert result.choice_text is None

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_error_status_carries_server_message(self, mock_post, engine):
        mock_post.return_value = _response(
            500, {'error': 'input length exceeds the context length'}
        )

        with pytest.raises(CompletionError, match="exceeds the context length"):
            engine.complete([{"role": "user", "content": "x"}], 0.7, 10)

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_non_json_error_body(self, mock_post, engine):
        response = _response(502, text="Bad Gateway")
        response.json.side_effect = ValueError("not json")
        mock_post.return_value = response

        with pytest.raises(CompletionError, match="Bad Gateway"):
            engine.complete([{"role": "user", "content": "x"}], 0.7, 10)

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_timeout(self, mock_post, engine):
        mock_post.side_effect = requests.exceptions.Timeout()

        with pytest.raises(CompletionError, match="timeout after 30 seconds"):
            engine.complete([{"role": "user", "content": "x"}], 0.7, 10)

    @patch('pdf_summarizer.ai.ollama_engine.requests.post')
    def test_connection_error(self, mock_post, engine):
        mock_post.side_effect = requests.exceptions.ConnectionError()

        with pytest.raises(CompletionError, match="Cannot connect"):
            engine.complete([{"role": "user", "content": "x"}], 0.7, 10)

    def test_unload_forgets_model(self, engine):
        engine.unload()
        assert engine.model_id is None
