import pytest
from fastapi.testclient import TestClient

from backend.app.credentials import MemoryCredentialStore
from backend.app.main import app, get_credential_store, get_orchestrator
from backend.app.proof import ProofOrchestrator, SEPARATOR_TOKEN
from backend.app.proof.errors import AuthError, EmptyResponseError, TransportError
from backend.tests._fake_provider import FakeProvider

PROOF = "\\begin{prooftree}\\Axiom$p$\\end{prooftree}"


@pytest.fixture
def store():
    return MemoryCredentialStore()


@pytest.fixture
def make_client(store):
    def _make(responses):
        provider = FakeProvider(responses)
        app.dependency_overrides[get_credential_store] = lambda: store
        app.dependency_overrides[get_orchestrator] = lambda: ProofOrchestrator(provider, credential_store=store)
        return TestClient(app), provider

    yield _make
    app.dependency_overrides.clear()


def test_health():
    client = TestClient(app)
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert "version" in body


def test_index_page_served():
    resp = TestClient(app).get("/")
    assert resp.status_code == 200
    assert "bussproofs" in resp.text


def test_generate_success(make_client, store):
    client, provider = make_client([f"Step 1...\n{SEPARATOR_TOKEN}\n```latex\n{PROOF}\n```"])
    resp = client.post("/api/proof", json={"formula": "p ⊢ p", "credential": "key-1"})
    assert resp.status_code == 200
    assert resp.json() == {
        "state": "succeeded",
        "reasoning_trace": "Step 1...",
        "proof_markup": PROOF,
        "display_markup": f"$${PROOF}$$",
    }
    assert resp.headers["X-UX-State"] == "succeeded"
    assert resp.headers.get("x-request-id")
    assert provider.calls[0][0] == "key-1"
    assert store.get() == "key-1"


def test_remember_false_leaves_store_untouched(make_client, store):
    client, _ = make_client([PROOF])
    resp = client.post("/api/proof", json={"formula": "p", "credential": "k", "remember": False})
    assert resp.status_code == 200
    assert store.get() == ""


def test_stored_credential_used_when_omitted(make_client, store):
    store.set("stored")
    client, provider = make_client([PROOF])
    resp = client.post("/api/proof", json={"formula": "p"})
    assert resp.status_code == 200
    assert provider.calls[0][0] == "stored"


def test_missing_credential_is_422_without_provider_call(make_client):
    client, provider = make_client([PROOF])
    resp = client.post("/api/proof", json={"formula": "p ⊢ p"})
    assert resp.status_code == 422
    assert resp.json() == {
        "state": "failed",
        "failure_type": "MISSING_CREDENTIAL",
        "message": "Please enter your Gemini API key.",
    }
    assert provider.calls == []


def test_missing_formula_is_422(make_client, store):
    store.set("k")
    client, _ = make_client([PROOF])
    resp = client.post("/api/proof", json={"formula": ""})
    assert resp.status_code == 422
    assert resp.json()["failure_type"] == "MISSING_INPUT"


@pytest.mark.parametrize(
    "error,status,failure_type",
    [
        (AuthError("API key not valid"), 401, "AUTH_ERROR"),
        (TransportError("down"), 502, "TRANSPORT_ERROR"),
        (EmptyResponseError(), 502, "EMPTY_RESPONSE"),
    ],
)
def test_remote_failures(make_client, error, status, failure_type):
    client, _ = make_client([error])
    resp = client.post("/api/proof", json={"formula": "p", "credential": "k"})
    assert resp.status_code == status
    body = resp.json()
    assert body["state"] == "failed"
    assert body["failure_type"] == failure_type
    assert body["message"].startswith("Failed to generate LaTeX: ")
    assert "proof_markup" not in body
    assert resp.headers["X-Failure-Type"] == failure_type


def test_credential_endpoints(make_client, store):
    client, _ = make_client([])
    assert client.get("/api/credential").json() == {"present": False}
    assert client.put("/api/credential", json={"credential": "abc"}).json() == {"present": True}
    assert store.get() == "abc"
    assert client.get("/api/credential").json() == {"present": True}
    assert client.delete("/api/credential").json() == {"present": False}
    assert store.get() == ""


def test_credential_never_echoed(make_client, store):
    store.set("super-secret")
    client, _ = make_client([])
    assert "super-secret" not in client.get("/api/credential").text


def test_unknown_fields_rejected(make_client):
    client, _ = make_client([])
    resp = client.post("/api/proof", json={"formula": "p", "extra": 1})
    assert resp.status_code == 422


def test_index_page_clears_previous_output_and_waits_for_mathjax():
    page = TestClient(app).get("/").text
    render_body = page.split("function render(state) {", 1)[1]
    # output is cleared before the early return for in-flight/failed states
    assert render_body.index("clearOutput();") < render_body.index("if (state.state !== 'succeeded') { return; }")
    assert "MathJax.typesetClear" in page
    assert "MathJax.startup.promise.then" in page
    assert "pageReady" in page
