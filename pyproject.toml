[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bbbrecorder"
version = "0.1.0"
description = "WebRTC recording helpers: RTP buffering, NACK handling, EBML element tables, recorder events and configuration"
requires-python = ">=3.10"
keywords = ["webrtc", "rtp", "nack", "jitter-buffer", "recording", "webm", "ebml"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Capture",
    "Topic :: Communications :: Conferencing",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["bbbrecorder"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
