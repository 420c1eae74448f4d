from src.error_handler import ErrorHandler


def test_handle_exception_returns_payload():
    eh = ErrorHandler()
    out = eh.handle_exception(Exception("boom"), context={"k": "v"})
    assert out["success"] is False
    assert "internal error" in out["message"].lower()
    assert out["error"] == "Exception"
    assert out["metadata"]["context"] == {"k": "v"}


def test_handle_exception_does_not_leak_message():
    out = ErrorHandler().handle_exception(ValueError("secret connection string"))
    assert "secret" not in out["message"]
    assert out["error"] == "ValueError"
    assert out["metadata"]["context"] == {}
