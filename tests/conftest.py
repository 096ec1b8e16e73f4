"""
Shared fixtures for the PDF Summarizer test suite.

FakeEngine stands in for OllamaEngine: it records every reload() and
complete() call and answers from a scripted list of replies.
"""

import pytest

from pdf_summarizer.ai import Completion
from pdf_summarizer.config import SummarizerSettings
from pdf_summarizer.summarization import SummarizationController


class FakeEngine:
    """
    Scripted stand-in for OllamaEngine.

    Attributes:
        replies: Queue of completion texts (str or None) or exceptions to raise.
            When exhausted, default_reply is returned.
        failing_models: Model ids whose reload() raises.
    """

    def __init__(self, replies=None, default_reply="テスト要約結果", failing_models=()):
        self.replies = list(replies or [])
        self.default_reply = default_reply
        self.failing_models = set(failing_models)
        self.reload_calls = []
        self.calls = []
        self.model_id = None
        self.progress_callback = None
        self.unloaded = False

    def set_init_progress_callback(self, callback):
        self.progress_callback = callback

    def reload(self, model_id):
        self.reload_calls.append(model_id)
        if model_id in self.failing_models:
            raise RuntimeError(f"Model {model_id} is not available")
        if self.progress_callback:
            self.progress_callback(f"Loaded {model_id}", 1.0)
        self.model_id = model_id

    def complete(self, messages, temperature, max_tokens):
        self.calls.append({
            'prompt': messages[0]['content'],
            'temperature': temperature,
            'max_tokens': max_tokens,
        })
        reply = self.replies.pop(0) if self.replies else self.default_reply
        if isinstance(reply, Exception):
            raise reply
        return Completion(choice_text=reply)

    def unload(self):
        self.unloaded = True
        self.model_id = None


@pytest.fixture
def settings():
    return SummarizerSettings(model_candidates=["model-a", "model-b", "model-c"])


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def controller(settings, fake_engine):
    """Controller wired to fake_engine, not yet initialized."""
    return SummarizationController(settings=settings, engine_factory=lambda s: fake_engine)


@pytest.fixture
def ready_controller(controller):
    """Controller that has already loaded a model."""
    controller.initialize_engine()
    assert controller.state.initialized
    return controller
