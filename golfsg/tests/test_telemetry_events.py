import pytest

from golfsg.telemetry import events


@pytest.fixture(autouse=True)
def reset_emitter():
    events.set_sg_telemetry_emitter(None)
    yield
    events.set_sg_telemetry_emitter(None)


def test_round_summary_payload():
    captured = []

    def emitter(event_name, payload):
        captured.append((event_name, payload))

    events.set_sg_telemetry_emitter(emitter)
    events.record_round_summary("r1", 12.6, shots=18, unratable=2)

    assert len(captured) == 1
    name, payload = captured[0]
    assert name == "sg.round.summary"
    assert payload["roundId"] == "r1"
    assert payload["durationMs"] == 13
    assert payload["shots"] == 18
    assert payload["unratable"] == 2
    assert isinstance(payload["ts"], int)


def test_rounds_aggregate_payload_optional_last():
    captured = []
    events.set_sg_telemetry_emitter(lambda name, payload: captured.append(payload))

    events.record_rounds_aggregate(-4.0, rounds=3)
    events.record_rounds_aggregate(1.2, rounds=10, last=10)

    assert captured[0]["durationMs"] == 0
    assert "last" not in captured[0]
    assert captured[1]["last"] == 10
    assert captured[1]["rounds"] == 10


def test_no_emitter_is_a_noop():
    events.record_round_summary("r1", 1.0, shots=0, unratable=0)


def test_non_callable_emitter_is_ignored():
    events.set_sg_telemetry_emitter("nope")  # type: ignore[arg-type]
    events.record_rounds_aggregate(1.0, rounds=1)
