"""RESPX-based HTTP mocking fixtures for testing.

Upstream endpoints are mocked at the HTTP layer so the real adapters,
router and FastAPI app run unchanged in tests.
"""

import httpx
import pytest
import respx

GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"
OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
HF_ROUTER_URL = "https://router.huggingface.co/v1/chat/completions"
HF_INFERENCE_URL = (
    "https://api-inference.huggingface.co/models/meta-llama/Llama-3.1-8B-Instruct"
)
RESEND_URL = "https://api.resend.com/emails"
SUPABASE_URL = "https://store.example.supabase.co"
SUPABASE_MESSAGES_URL = f"{SUPABASE_URL}/rest/v1/messages"

ALL_PROVIDER_KEYS = {
    "GROQ_API_KEY": "test-groq-key",
    "OPENROUTER_API_KEY": "test-openrouter-key",
    "HF_TOKEN": "test-hf-token",
    "HUGGINGFACE_API_KEY": "test-hf-inference-key",
}


def chat_completion(content):
    """OpenAI-style chat completion body with the given assistant content."""
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1677652288,
        "model": "upstream-model",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 15, "total_tokens": 25},
    }


def ok_completion(content):
    return httpx.Response(200, json=chat_completion(content))


@pytest.fixture
def mock_upstream():
    """Mock every upstream host with RESPX.

    Unmatched requests fail the test, so a provider that should have been
    skipped cannot silently reach the network.

    Example:
        def test_chat(mock_upstream):
            route = mock_upstream.post(GROQ_URL).mock(return_value=ok_completion("Hi"))
    """
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def hf_inference_body():
    """Text-generation Inference API body, including a trailing end-of-turn."""
    return [{"generated_text": "Our pasta is made fresh daily.<|eot_id|>ignored tail"}]
