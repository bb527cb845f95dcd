import pytest

from streaming_platform.platform.db.models import MAX_BIGINT, TITLE_LENGTH
from streaming_platform.platform.errors import CallError
from streaming_platform.platform.services import contract


def test_prepare_native_accepts_a_parameter_called_name() -> None:
    call = contract.prepare_native("create-playlist", playlist_id=3, name="Focus", is_public=False)
    assert call.function.name == "create-playlist"
    assert call.kwargs == {"playlist_id": 3, "name": "Focus", "is_public": False}
    assert call.literals == ("u3", '"Focus"', "false")


def test_uint_arguments_must_fit_storage() -> None:
    call = contract.prepare_call("get-content", [f"u{MAX_BIGINT}"])
    assert call.kwargs == {"content_id": MAX_BIGINT}

    with pytest.raises(CallError):
        contract.prepare_call("get-content", [f"u{MAX_BIGINT + 1}"])
    with pytest.raises(CallError):
        contract.prepare_call(
            "subscribe-to-creator",
            ["'ST1SJ3DTE5DN7X54YDH5D64R3BCB6A2AG2ZQ8YPD5", "u18446744073709551616", '"basic"'],
        )
    with pytest.raises(CallError):
        contract.prepare_native("purchase-content", content_id=MAX_BIGINT + 1)


def test_string_arguments_must_fit_their_columns() -> None:
    def publish(title: str, category: str) -> list[str]:
        return ["u1", f'"{title}"', '"desc"', "u1", "false", f'"{category}"', "false"]

    contract.prepare_call("publish-content", publish("t" * TITLE_LENGTH, "music"))

    with pytest.raises(CallError):
        contract.prepare_call("publish-content", publish("t" * (TITLE_LENGTH + 1), "music"))
    with pytest.raises(CallError):
        contract.prepare_call("publish-content", publish("Track", "c" * 65))
    with pytest.raises(CallError):
        contract.prepare_native("create-playlist", playlist_id=1, name="n" * 257, is_public=True)

    # descriptions are unbounded text
    contract.prepare_call("publish-content", ["u1", '"Track"', f'"{"d" * 5000}"', "u1", "false", '"music"', "false"])
