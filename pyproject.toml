[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcmkit"
version = "0.1.0"
description = "Read PCM audio from WAVE, AIFF, CAFF and raw files, with sample format conversion and dialnorm measurement"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "pcm", "wav", "aiff", "caff", "dialnorm", "rms"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wavinfo = "pcmkit.wavinfo:main"
wavrms = "pcmkit.wavrms:main"

[tool.hatch.build.targets.wheel]
packages = ["pcmkit"]

[tool.pytest.ini_options]
addopts = "-ra"
