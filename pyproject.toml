[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gpstrack"
version = "0.1.0"
description = "GPRMC sentence parsing, nearest-landmark lookup and a simulated GPIO/UART register model"
requires-python = ">=3.10"
dependencies = []
keywords = ["gps", "nmea", "gprmc", "haversine", "landmark", "uart", "gpio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Environment :: Console",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gpstrack = "gpstrack.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gpstrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
