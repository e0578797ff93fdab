[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rcposc"
version = "1.0.0"
description = "Bridge between Yamaha RCP (TCP) remote control and OSC (UDP) messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["yamaha", "rcp", "osc", "mixer", "bridge", "audio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Mixers",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
rcposc = "rcposc.bridge:main"

[tool.hatch.build.targets.wheel]
packages = ["rcposc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
