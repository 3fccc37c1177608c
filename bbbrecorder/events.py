"""Pub/sub event messages exchanged with the recorder, and their decoding."""

from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping

log = logging.getLogger(__name__)

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)
_FLOWING_STATUS = {True: "flowing", False: "not_flowing"}


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(moment: datetime) -> str:
    """Format as RFC 3339 with trailing fractional zeros trimmed."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    offset = moment.utcoffset() or timedelta(0)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(text: str) -> datetime:
    match = _TIME_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid timestamp {text!r}")
    year, month, day, hour, minute, second, frac, zone = match.groups()
    micro = int((frac or "")[:6].ljust(6, "0"))
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if name.lower() == lowered:
            return value
    return None


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _lookup(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key} must be a string")
    return value


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = _lookup(data, key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field {key} must be a string")
    return value


def _int(data: Mapping[str, Any], key: str) -> int:
    value = _lookup(data, key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key} must be an integer")
    return value


def _time(data: Mapping[str, Any], key: str) -> datetime:
    value = _lookup(data, key)
    if value is None:
        return _ZERO_TIME
    if not isinstance(value, str):
        raise ValueError(f"field {key} must be a timestamp string")
    return _parse_time(value)


def _omit_empty(items: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in items.items() if value not in (None, "")}


@dataclass
class StartRecordingResponse:
    """Answer to a start request (Recorder -> SFU)."""

    id: str = ""
    session_id: str = ""
    status: str = ""
    error: str | None = None
    sdp: str | None = None
    file_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON object form of the message."""
        return _omit_empty(
            {
                "id": self.id,
                "recordingSessionId": self.session_id,
                "status": self.status,
                "error": self.error,
                "sdp": self.sdp,
                "fileName": self.file_name,
            }
        )

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> StartRecordingResponse:
        return cls(
            id=_str(data, "id"),
            session_id=_str(data, "recordingSessionId"),
            status=_str(data, "status"),
            error=_opt_str(data, "error"),
            sdp=_opt_str(data, "sdp"),
            file_name=_opt_str(data, "fileName"),
        )


@dataclass
class StartRecording:
    """Request to start a recording (SFU -> Recorder)."""

    id: str = ""
    session_id: str = ""
    sdp: str = ""
    file_name: str = ""
    username: str = ""

    def fail(self, err: object) -> StartRecordingResponse:
        """Build the failure response carrying ``err``'s message."""
        return StartRecordingResponse(
            id="startRecordingResponse",
            session_id=self.session_id,
            status="failed",
            error=str(err),
        )

    def success(self, sdp: str, file_name: str) -> StartRecordingResponse:
        """Build the success response with the SDP answer and file path."""
        return StartRecordingResponse(
            id="startRecordingResponse",
            session_id=self.session_id,
            status="ok",
            error=None,
            sdp=sdp,
            file_name=file_name,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON object form of the message."""
        return _omit_empty(
            {
                "id": self.id,
                "recordingSessionId": self.session_id,
                "sdp": self.sdp,
                "fileName": self.file_name,
                "username": self.username,
            }
        )

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> StartRecording:
        return cls(
            id=_str(data, "id"),
            session_id=_str(data, "recordingSessionId"),
            sdp=_str(data, "sdp"),
            file_name=_str(data, "fileName"),
            username=_str(data, "username"),
        )


@dataclass
class RecordingRtpStatusChanged:
    """Media started or stopped flowing (Recorder -> SFU).

    ``timestamp_hr`` is the latest frame timestamp in milliseconds.
    """

    id: str = ""
    session_id: str = ""
    status: str = ""
    timestamp_utc: datetime = field(default=_ZERO_TIME)
    timestamp_hr: int = 0

    def to_dict(self) -> dict[str, Any]:
        """JSON object form of the message."""
        result = _omit_empty(
            {"id": self.id, "recordingSessionId": self.session_id, "status": self.status}
        )
        result["timestampUTC"] = _format_time(self.timestamp_utc)
        result["timestampHR"] = self.timestamp_hr
        return result

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> RecordingRtpStatusChanged:
        return cls(
            id=_str(data, "id"),
            session_id=_str(data, "recordingSessionId"),
            status=_str(data, "status"),
            timestamp_utc=_time(data, "timestampUTC"),
            timestamp_hr=_int(data, "timestampHR"),
        )


@dataclass
class RecordingStopped:
    """A recording ended (Recorder -> SFU); ``timestamp_hr`` is in milliseconds."""

    id: str = ""
    session_id: str = ""
    reason: str = ""
    timestamp_utc: datetime = field(default=_ZERO_TIME)
    timestamp_hr: int = 0

    def to_dict(self) -> dict[str, Any]:
        """JSON object form of the message."""
        result = _omit_empty(
            {"id": self.id, "recordingSessionId": self.session_id, "reason": self.reason}
        )
        result["timestampUTC"] = _format_time(self.timestamp_utc)
        if self.timestamp_hr:
            result["timestampHR"] = self.timestamp_hr
        return result


@dataclass
class StopRecording:
    """Request to stop a recording (SFU -> Recorder)."""

    id: str = ""
    session_id: str = ""

    def stopped(self, reason: str, ts: int) -> RecordingStopped:
        """Build the stop notification; ``ts`` is in milliseconds."""
        return RecordingStopped(
            id="recordingStopped",
            session_id=self.session_id,
            reason=reason,
            timestamp_utc=_now_utc(),
            timestamp_hr=ts,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON object form of the message."""
        return _omit_empty({"id": self.id, "recordingSessionId": self.session_id})

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> StopRecording:
        return cls(id=_str(data, "id"), session_id=_str(data, "recordingSessionId"))


@dataclass
class RecorderStatus:
    """Recorder version and instance (Recorder -> *); ``timestamp`` is epoch ms."""

    id: str = ""
    app_version: str = ""
    instance_id: str = ""
    timestamp: int = 0

    def to_dict(self) -> dict[str, Any]:
        """JSON object form of the message."""
        result = _omit_empty(
            {"id": self.id, "appVersion": self.app_version, "instanceId": self.instance_id}
        )
        if self.timestamp:
            result["timestamp"] = self.timestamp
        return result

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> RecorderStatus:
        return cls(
            id=_str(data, "id"),
            app_version=_str(data, "appVersion"),
            instance_id=_str(data, "instanceId"),
            timestamp=_int(data, "timestamp"),
        )


@dataclass
class GetRecorderStatus:
    """Status query (* -> Recorder)."""

    id: str = ""

    def status(self, app_version: str, instance_id: str) -> RecorderStatus:
        """Build the status answer."""
        return new_recorder_status(app_version, instance_id)

    def to_dict(self) -> dict[str, Any]:
        """JSON object form of the message."""
        return _omit_empty({"id": self.id})

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> GetRecorderStatus:
        return cls(id=_str(data, "id"))


@dataclass
class Event:
    """A decoded message: its id and the typed payload."""

    id: str = ""
    data: Any = None

    def is_valid(self) -> bool:
        """Whether the event carries an id."""
        return self.id != ""

    def start_recording(self) -> StartRecording | None:
        """The payload if it is a start request."""
        return self.data if isinstance(self.data, StartRecording) else None

    def start_recording_response(self) -> StartRecordingResponse | None:
        """The payload if it is a start response."""
        return self.data if isinstance(self.data, StartRecordingResponse) else None

    def stop_recording(self) -> StopRecording | None:
        """The payload if it is a stop request."""
        return self.data if isinstance(self.data, StopRecording) else None

    def get_recorder_status(self) -> GetRecorderStatus | None:
        """The payload if it is a status query."""
        return self.data if isinstance(self.data, GetRecorderStatus) else None


def new_recording_rtp_status_changed(
    session_id: str, status: bool, ts: int
) -> RecordingRtpStatusChanged:
    """Build a flow status notification; ``ts`` is in milliseconds."""
    return RecordingRtpStatusChanged(
        id="recordingRtpStatusChanged",
        session_id=session_id,
        status=_FLOWING_STATUS[bool(status)],
        timestamp_utc=_now_utc(),
        timestamp_hr=ts,
    )


def new_recording_stopped(session_id: str, reason: str, ts: int) -> RecordingStopped:
    """Build a stop notification; ``ts`` is in milliseconds."""
    return RecordingStopped(
        id="recordingStopped",
        session_id=session_id,
        reason=reason,
        timestamp_utc=_now_utc(),
        timestamp_hr=ts,
    )


def new_recorder_status(app_version: str, instance_id: str) -> RecorderStatus:
    """Build a status message stamped with the current time."""
    return RecorderStatus(
        id="recorderStatus",
        app_version=app_version,
        instance_id=instance_id,
        timestamp=int(time.time() * 1000),
    )


_DECODERS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "startRecording": StartRecording._from_dict,
    "stopRecording": StopRecording._from_dict,
    "startRecordingResponse": StartRecordingResponse._from_dict,
    "recordingRtpStatusChanged": RecordingRtpStatusChanged._from_dict,
    "getRecorderStatus": GetRecorderStatus._from_dict,
    "recorderStatus": RecorderStatus._from_dict,
}


def decode(message: bytes | str) -> Event | None:
    """Decode a JSON message into an :class:`Event`.

    Returns ``None`` when the message is not a JSON object, has no string
    ``id``, or its fields have the wrong types. Unknown ids keep the raw
    object as their payload.
    """
    try:
        data = json.loads(message)
    except ValueError as exc:
        log.error("%s %r", exc, message)
        return None
    if not isinstance(data, dict):
        log.error("message is not an object: %r", message)
        return None

    event_id = data.get("id")
    if not isinstance(event_id, str):
        return None

    decoder = _DECODERS.get(event_id)
    if decoder is None:
        return Event(id=event_id, data=data)
    try:
        payload = decoder(data)
    except ValueError as exc:
        log.error("%s %r", exc, message)
        return None
    return Event(id=event_id, data=payload)