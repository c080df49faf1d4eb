[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "so_survey_analyzer"
version = "0.1.0"
description = "Explore developer survey spreadsheets: question search, answer distributions and respondent subsets"
requires-python = ">=3.10"
dependencies = []
keywords = ["survey", "xlsx", "spreadsheet", "analysis", "statistics", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
so-survey-cli = "so_survey_analyzer.cli:main"
so-survey-walkthrough = "so_survey_analyzer.walkthrough:main"

[tool.hatch.build.targets.wheel]
packages = ["so_survey_analyzer"]

[tool.pytest.ini_options]
addopts = "-ra"
