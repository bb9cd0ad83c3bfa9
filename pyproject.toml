[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weatherpanel"
version = "0.1.0"
description = "Controller for a 16x16 RGB LED weather panel with Game of Life and etch-a-sketch views, fed over MQTT"
requires-python = ">=3.10"
keywords = ["weather", "led-matrix", "mqtt", "game-of-life", "home-automation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]
dependencies = [
    "paho-mqtt",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
weatherpanel = "weatherpanel.app:main"

[tool.hatch.build.targets.wheel]
packages = ["weatherpanel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
