[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "xlsxparts"
version = "0.1.0"
description = "Readers and writers for XML parts of an xlsx package: cell ranges, content types, document properties, and drawing positions and shapes."
requires-python = ">=3.10"
dependencies = []
keywords = ["xlsx", "spreadsheet", "ooxml", "excel", "xml", "content-types", "docprops"]
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
    "Topic :: Office/Business :: Financial :: Spreadsheet",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing :: Markup :: XML",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["xlsxparts*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
