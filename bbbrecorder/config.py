"""Recorder configuration: defaults, file and environment loading, dumping."""

from __future__ import annotations

import logging
import os
import re
import sys
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Mapping

import yaml

log = logging.getLogger(__name__)

ENV_PREFIX = "BBBRECORDER_"
_UINT16_MAX = 0xFFFF
_TRUE = {"1", "t", "true", "y", "yes", "on"}
_FALSE = {"0", "f", "false", "n", "no", "off"}
_INDEX_RE = re.compile(r"[+-]?\d+")


def _key(name: str, omitempty: bool = True, maximum: int | None = None) -> dict[str, Any]:
    return {"key": name, "omitempty": omitempty, "max": maximum}


@dataclass
class App:
    """Identity of the running application."""

    name: str = ""
    version: str = ""
    git_hash: str = ""
    long_name: str = ""
    instance_id: str = ""


@dataclass
class Recorder:
    """Where and how recordings are written."""

    directory: str = field(default="", metadata=_key("directory"))
    dir_file_mode: str = field(default="", metadata=_key("dirFileMode"))
    file_mode: str = field(default="", metadata=_key("fileMode"))
    write_to_dev_null: bool = field(default=False, metadata=_key("writeToDevNull"))


@dataclass
class Redis:
    """Redis connection settings."""

    address: str = field(default="", metadata=_key("address"))
    network: str = field(default="", metadata=_key("network"))
    password: str = field(default="", metadata=_key("password"))


@dataclass
class Channels:
    """Pub/sub channel names."""

    subscribe: str = field(default="", metadata=_key("subscribe"))
    publish: str = field(default="", metadata=_key("publish"))


@dataclass
class PubSub:
    """Pub/sub adapter selection and settings."""

    channels: Channels = field(default_factory=Channels, metadata=_key("channels"))
    adapter: str = field(default="", metadata=_key("adapter"))
    adapters: dict[str, Any] = field(
        default_factory=dict, metadata=_key("adapters", omitempty=False)
    )


@dataclass
class WebRTC:
    """ICE servers, UDP port range and jitter buffer size."""

    ice_servers: list[Any] = field(default_factory=list, metadata=_key("iceServers"))
    rtc_min_port: int = field(default=0, metadata=_key("rtcMinPort", maximum=_UINT16_MAX))
    rtc_max_port: int = field(default=0, metadata=_key("rtcMaxPort", maximum=_UINT16_MAX))
    jitter_buffer: int = field(default=0, metadata=_key("jitterBuffer", maximum=_UINT16_MAX))


@dataclass
class HTTP:
    """Built-in test HTTP server."""

    enable: bool = field(default=False, metadata=_key("enable"))
    port: int = field(default=0, metadata=_key("port"))


@dataclass
class Prometheus:
    """Metrics exporter."""

    enable: bool = field(default=False, metadata=_key("enable"))
    listen_address: str = field(default="", metadata=_key("listenAddress"))


def _normalize(name: str) -> str:
    return name.replace("_", "").lower()


def _find_field(obj: Any, token: str) -> Any:
    for item in fields(obj):
        key = item.metadata.get("key")
        if key is None:
            continue
        if _normalize(item.name) == token or _normalize(key) == token:
            return item
    return None


def _convert(current: Any, raw: Any, meta: Mapping[str, Any], where: str) -> Any:
    if isinstance(current, bool):
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str) and raw.strip().lower() in _TRUE | _FALSE:
            return raw.strip().lower() in _TRUE
        raise ValueError(f"{where}: invalid boolean {raw!r}")
    if isinstance(current, int):
        if isinstance(raw, bool):
            raise ValueError(f"{where}: invalid integer {raw!r}")
        try:
            value = int(raw.strip()) if isinstance(raw, str) else int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"{where}: invalid integer {raw!r}") from None
        maximum = meta.get("max")
        if maximum is not None and not 0 <= value <= maximum:
            raise ValueError(f"{where}: value {value} out of range")
        return value
    if isinstance(current, str):
        if not isinstance(raw, str):
            raise ValueError(f"{where}: expected a string")
        return raw
    if isinstance(current, list):
        if not isinstance(raw, list):
            raise ValueError(f"{where}: expected a list")
        return raw
    raise ValueError(f"{where}: unsupported value")


def _merge(obj: Any, values: Mapping[str, Any], where: str = "") -> None:
    for name, raw in values.items():
        path = f"{where}.{name}" if where else str(name)
        item = _find_field(obj, _normalize(str(name)))
        if item is None:
            log.warning("ignoring unknown configuration key %s", path)
            continue
        current = getattr(obj, item.name)
        if is_dataclass(current) or isinstance(current, dict):
            if raw in (None, ""):
                continue
            if not isinstance(raw, dict):
                raise ValueError(f"{path}: expected a mapping")
            if is_dataclass(current):
                _merge(current, raw, path)
            else:
                _merge_map(current, raw, path)
            continue
        if raw is None or (raw == "" and not isinstance(current, str)):
            continue
        setattr(obj, item.name, _convert(current, raw, item.metadata, path))


def _merge_map(target: dict[str, Any], values: Mapping[str, Any], where: str) -> None:
    for key, raw in values.items():
        existing = target.get(key)
        if is_dataclass(existing) and isinstance(raw, dict):
            _merge(existing, raw, f"{where}.{key}")
        else:
            target[key] = raw


def _env_tree(environ: Mapping[str, str]) -> dict[str, Any]:
    tree: dict[str, Any] = {}
    for name, value in environ.items():
        tokens = name[len(ENV_PREFIX):].lower().split("_")
        if not all(tokens):
            raise ValueError(f"invalid environment variable name {name}")
        node = tree
        for token in tokens[:-1]:
            child = node.setdefault(token, {})
            if not isinstance(child, dict):
                raise ValueError(f"conflicting environment variable {name}")
            node = child
        if isinstance(node.get(tokens[-1]), dict):
            raise ValueError(f"conflicting environment variable {name}")
        node[tokens[-1]] = value
    return tree


def _find_config_file(filename: str, app_name: str) -> str | None:
    if filename and os.path.exists(filename):
        return filename
    base_paths = (
        f"/etc/bigbluebutton/{app_name}",
        f"/etc/{app_name}/{app_name}",
        f"$HOME/.config/{app_name}",
        f"./{app_name}",
    )
    for base in base_paths:
        for ext in ("yaml", "yml"):
            candidate = os.path.expandvars(f"{base}.{ext}")
            if os.path.exists(candidate):
                return candidate
    return None


def _is_zero(value: Any) -> bool:
    if is_dataclass(value):
        return all(_is_zero(getattr(value, item.name)) for item in fields(value))
    if isinstance(value, (list, dict)):
        return not value
    return value is None or value is False or value == "" or value == 0


def _to_plain(value: Any) -> Any:
    if is_dataclass(value):
        result = {}
        for item in fields(value):
            meta = item.metadata
            if "key" not in meta:
                continue
            current = getattr(value, item.name)
            if meta["omitempty"] and _is_zero(current):
                continue
            result[meta["key"]] = _to_plain(current)
        return result
    if isinstance(value, dict):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    return value


@dataclass
class Config:
    """The complete recorder configuration."""

    app: App = field(default_factory=App)
    debug: bool = field(default=False, metadata=_key("debug", omitempty=False))
    recorder: Recorder = field(default_factory=Recorder, metadata=_key("recorder"))
    pubsub: PubSub = field(default_factory=PubSub, metadata=_key("pubsub"))
    webrtc: WebRTC = field(default_factory=WebRTC, metadata=_key("webrtc"))
    http: HTTP = field(default_factory=HTTP, metadata=_key("http"))
    prometheus: Prometheus = field(default_factory=Prometheus, metadata=_key("prometheus"))

    def set_defaults(self) -> Config:
        """Fill in the default values and return ``self``."""
        if not self.app.name:
            program = sys.argv[0] if sys.argv else ""
            self.app.name = os.path.abspath(program) if program else "unknown"

        self.recorder.dir_file_mode = "0700"
        self.recorder.file_mode = "0600"
        self.recorder.write_to_dev_null = False
        self.pubsub.channels = Channels(
            subscribe="to-" + self.app.name,
            publish="from-" + self.app.name,
        )
        self.pubsub.adapter = "redis"
        self.pubsub.adapters = {"redis": Redis(address=":6379", network="tcp", password="")}
        self.webrtc.rtc_min_port = 24577
        self.webrtc.rtc_max_port = 32768
        self.webrtc.jitter_buffer = 512
        self.http = HTTP(enable=False, port=8080)
        self.prometheus = Prometheus(enable=False, listen_address="127.0.0.1:3200")
        return self

    def load(self, app: App, config_file: str = "") -> None:
        """Overlay a YAML file, then ``BBBRECORDER_*`` environment variables.

        Raises ``ValueError`` when either source cannot be decoded.
        """
        filename = app.name + ".yml" if not config_file else os.path.normpath(config_file)
        found = _find_config_file(filename, app.name)
        if found is None:
            log.debug("no configuration file found: %s", filename)
        else:
            try:
                with open(found, encoding="utf-8") as handle:
                    document = yaml.load(handle, Loader=yaml.BaseLoader)
                if document not in (None, ""):
                    if not isinstance(document, dict):
                        raise ValueError("top level must be a mapping")
                    _merge(self, document)
            except (OSError, yaml.YAMLError, ValueError) as exc:
                raise ValueError(
                    f"failed to decode configuration from file: {found}: {exc}"
                ) from exc
            log.info("configuration loaded from file: %s", found)

        env = {name: value for name, value in os.environ.items() if name.startswith(ENV_PREFIX)}
        if not env:
            log.debug("no %s* environment variables defined", ENV_PREFIX)
        else:
            try:
                _merge(self, _env_tree(env))
            except ValueError as exc:
                raise ValueError(
                    f"failed to decode configuration from environment variables: {exc}"
                ) from exc
            log.info("configuration loaded from %d environment variables", len(env))

        self.app = app

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with YAML key names; empty optional values are left out."""
        return _to_plain(self)


def _step(value: Any, part: str) -> Any:
    if isinstance(value, list):
        if not _INDEX_RE.fullmatch(part):
            raise KeyError(part)
        index = int(part)
        if index < 0 or len(value) < index + 1:
            raise KeyError(part)
        value = value[index]
    elif isinstance(value, dict):
        if part not in value:
            raise KeyError(part)
        value = value[part]
    else:
        raise KeyError(part)
    if not isinstance(value, (list, dict, str, bool, int)):
        raise KeyError(part)
    return value


def dump_value(cfg: Config, path: str) -> str:
    """Return the YAML text of the value at dotted ``path``, or of everything for ``all``.

    List elements are addressed by index. Raises ``KeyError`` when nothing is there.
    """
    value: Any = cfg.to_dict()
    if path != "all":
        for part in path.split("."):
            value = _step(value, part)
    text = yaml.safe_dump(value, default_flow_style=False, sort_keys=True, allow_unicode=True)
    if text.endswith("\n...\n"):
        text = text[: -len("...\n")]
    return text