[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voicechat"
version = "0.1.0"
description = "Speech-to-text via a Paraformer service followed by a DeepSeek chat reply"
requires-python = ">=3.10"
dependencies = []
keywords = ["speech recognition", "asr", "paraformer", "deepseek", "chat", "llm"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Speech",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
voicechat = "voicechat.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["voicechat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
