import json
import time
from datetime import datetime, timezone

from bbbrecorder.events import (
    Event,
    GetRecorderStatus,
    RecordingRtpStatusChanged,
    StartRecording,
    StartRecordingResponse,
    StopRecording,
    decode,
    new_recorder_status,
    new_recording_rtp_status_changed,
    new_recording_stopped,
)


def test_decode_start_recording():
    message = json.dumps(
        {
            "id": "startRecording",
            "recordingSessionId": "sess-1",
            "sdp": "offer-sdp",
            "fileName": "out.webm",
            "username": "alice",
            "extra": 1,
        }
    ).encode()
    event = decode(message)
    assert event.id == "startRecording"
    assert event.is_valid()
    start = event.start_recording()
    assert start == StartRecording(
        id="startRecording",
        session_id="sess-1",
        sdp="offer-sdp",
        file_name="out.webm",
        username="alice",
    )
    assert event.stop_recording() is None
    assert event.start_recording_response() is None
    assert event.get_recorder_status() is None


def test_decode_unknown_id_keeps_raw_object():
    payload = {"id": "somethingElse", "value": [1, 2]}
    event = decode(json.dumps(payload))
    assert event.id == "somethingElse"
    assert event.data == payload


def test_decode_rejects_bad_messages():
    assert decode(b"{not json") is None
    assert decode(b"[1, 2]") is None
    assert decode(b'{"recordingSessionId": "x"}') is None
    assert decode(b'{"id": 5}') is None
    assert decode(b'{"id": "startRecording", "sdp": 5}') is None
    assert decode(b'{"id": "recorderStatus", "timestamp": "soon"}') is None


def test_decode_null_and_case_insensitive_fields():
    event = decode(b'{"id": "stopRecording", "RecordingSessionId": "abc"}')
    assert event.stop_recording().session_id == "abc"
    event = decode(b'{"id": "startRecording", "sdp": null}')
    assert event.start_recording().sdp == ""


def test_empty_id_is_not_valid():
    event = decode(b'{"id": ""}')
    assert event.is_valid() is False
    assert Event().is_valid() is False


def test_fail_response():
    request = StartRecording(id="startRecording", session_id="s1")
    response = request.fail(RuntimeError("boom"))
    assert response.to_dict() == {
        "id": "startRecordingResponse",
        "recordingSessionId": "s1",
        "status": "failed",
        "error": "boom",
    }


def test_success_response_round_trip():
    request = StartRecording(id="startRecording", session_id="s2")
    response = request.success("answer-sdp", "/rec/out.webm")
    data = response.to_dict()
    assert data["status"] == "ok"
    assert data["sdp"] == "answer-sdp"
    assert data["fileName"] == "/rec/out.webm"
    assert "error" not in data
    decoded = decode(json.dumps(data)).start_recording_response()
    assert decoded == response


def test_rtp_status_changed_round_trip():
    flowing = new_recording_rtp_status_changed("s3", True, 1500)
    stalled = new_recording_rtp_status_changed("s3", False, 0)
    assert flowing.status == "flowing"
    assert stalled.status == "not_flowing"
    assert stalled.to_dict()["timestampHR"] == 0
    data = flowing.to_dict()
    assert data["timestampUTC"].endswith("Z")
    event = decode(json.dumps(data))
    assert isinstance(event.data, RecordingRtpStatusChanged)
    assert event.data == flowing


def test_zero_time_is_formatted():
    data = RecordingRtpStatusChanged().to_dict()
    assert data["timestampUTC"] == "0001-01-01T00:00:00Z"


def test_stopped_omits_zero_timestamp():
    before = datetime.now(timezone.utc)
    stopped = StopRecording(id="stopRecording", session_id="s4").stopped(
        "session not found", 0
    )
    data = stopped.to_dict()
    assert data["id"] == "recordingStopped"
    assert data["reason"] == "session not found"
    assert "timestampHR" not in data
    assert stopped.timestamp_utc >= before
    assert new_recording_stopped("s4", "closed", 42).to_dict()["timestampHR"] == 42


def test_recorder_status_round_trip():
    before = int(time.time() * 1000)
    status = new_recorder_status("1.2.3", "inst-1")
    after = int(time.time() * 1000)
    assert before <= status.timestamp <= after
    assert status.id == "recorderStatus"
    event = decode(json.dumps(status.to_dict()))
    assert event.data == status


def test_get_recorder_status_answers():
    event = decode(b'{"id": "getRecorderStatus"}')
    query = event.get_recorder_status()
    assert query == GetRecorderStatus(id="getRecorderStatus")
    answer = query.status("2.0", "inst-2")
    assert (answer.app_version, answer.instance_id) == ("2.0", "inst-2")


def test_response_default_omits_everything():
    assert StartRecordingResponse().to_dict() == {}