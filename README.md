# bbbrecorder

Building blocks for a service that records WebRTC media sessions on request:
RTP packet ordering and loss tracking, the EBML/WebM element catalogue, the
recorder's request and reply messages, and its configuration.

## What is inside

- `bbbrecorder.jitter_buffer.JitterBuffer` puts RTP packets back in order
  by their unwrapped sequence number. `add(seq, packet)` returns `False` for
  packets that are too old or already held; `next_packets()` returns the run of
  in-order packets that are ready (an empty list if none), and
  `set_next_packets_start()` skips ahead.
- `bbbrecorder.sequence_unwrapper.SequenceUnwrapper` turns fixed-width
  sequence numbers (for RTP, `SequenceUnwrapper(16)`) into values that keep
  counting up past each wraparound.
- `bbbrecorder.receive_log.ReceiveLog` records which 16-bit sequence numbers
  have arrived. `get(seq)` tells whether one was seen and
  `missing_seq_numbers(skip_last_n)` lists the gaps. Sizes must be powers of
  two from 64 to 32768; any other size raises `ValueError`.
- `bbbrecorder.nack` turns missing sequence numbers into `NackPair` entries
  (`nack_pairs`) and turns them back again (`nack_pairs_to_sequence_numbers`).
- `bbbrecorder.send_buffer.SendBuffer` is a power-of-two ring of sent
  packets (objects with a `sequence_number`), looked up with `get(seq)`.
- `bbbrecorder.ebml` holds the EBML/WebM element catalogue:
  - `datatype.DataType` – payload kinds (`MASTER`, `UINT`, `STRING`, …);
  - `elementtype.ElementType` and `element_type_from_string()`, which also
    accepts the WebM names `TimecodeScale` and `Timecode` and raises
    `UnknownElementNameError` for unknown names;
  - `elementtable` – `element_bytes`, `element_data_type`, `is_top_level` and
    `element_from_bytes` for going between elements and their wire IDs;
  - `errors.EbmlError`, `wrap_error` and `wrap_errorf`, an error that keeps its
    underlying reason and can test its cause chain with `matches()`.
- `bbbrecorder.events` holds the recorder's messages (`StartRecording`,
  `StartRecordingResponse`, `StopRecording`, `RecordingStopped`,
  `RecordingRtpStatusChanged`, `GetRecorderStatus`, `RecorderStatus`), each
  with `to_dict()` giving its JSON object form. `decode()` reads a raw JSON
  message into an `Event`, or returns `None` if it cannot.
- `bbbrecorder.sdp_signal` encodes a JSON-serialisable object as base64
  JSON (`encode`) and back (`decode`); `rand_seq(n)` makes a random string of
  letters.
- `bbbrecorder.config.Config` holds the configuration. `set_defaults()` fills
  in the defaults; `load(app, config_file)` overlays a YAML file and then
  `BBBRECORDER_*` environment variables, raising `ValueError` if either cannot
  be decoded. `dump_value(cfg, path)` returns the YAML of the value at a
  dotted path (or of everything for `all`) and raises `KeyError` when there is
  nothing there.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Ordering incoming RTP packets:

```python
from bbbrecorder.sequence_unwrapper import SequenceUnwrapper
from bbbrecorder.jitter_buffer import JitterBuffer

unwrapper = SequenceUnwrapper(16)
buffer = JitterBuffer(512)

for seq, packet in incoming_packets:
    buffer.add(unwrapper.unwrap(seq), packet)
    for ready in buffer.next_packets():
        handle(ready)
```

Answering a status request:

```python
from bbbrecorder import events

event = events.decode(b'{"id": "getRecorderStatus"}')
if event is not None and event.is_valid():
    request = event.get_recorder_status()
    reply = request.status("1.0.0", "instance-1")
    print(reply.to_dict())
```

Reading the configuration:

```python
from bbbrecorder.config import App, Config, dump_value

app = App(name="bbb-webrtc-recorder", version="1.0.0")
cfg = Config(app=app).set_defaults()
cfg.load(app, "")
print(dump_value(cfg, "webrtc.jitterBuffer"))
```

## What this package does not do

It has no message transport: nothing here connects to Redis or any other
broker, so messages are built and decoded but sending and receiving them is
left to the caller. It has no command-line program, no WebRTC peer
connection, no HTTP server or metrics exporter, and it does not write WebM
files; the EBML part is a catalogue of elements, not a muxer or demuxer.