[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xormqtt"
version = "0.1.0"
description = "MQTT publisher and subscriber that exchange XOR-obfuscated payloads and flag replayed messages"
requires-python = ">=3.10"
dependencies = [
    "paho-mqtt",
    "psutil",
]
keywords = ["mqtt", "xor", "publisher", "subscriber", "replay-detection", "iot"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications",
    "Topic :: Internet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
xormqtt-publisher = "xormqtt.publisher:main"
xormqtt-subscriber = "xormqtt.subscriber:main"

[tool.hatch.build.targets.wheel]
packages = ["xormqtt"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
