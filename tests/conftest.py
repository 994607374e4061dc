"""Pytest configuration and shared fixtures."""

from pathlib import Path

import matplotlib
import pandas as pd
import pytest

from covidatlas.config.settings import DataPathsConfig, OutputConfig, PipelineConfig

matplotlib.use("Agg")

GLOBAL_CONFIRMED_CSV = """\
Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,1/24/20
Anhui,China,31.8257,117.2264,1,9,15
Beijing,China,40.1824,116.4142,14,22,36
Hubei,China,30.9756,112.2707,444,444,549
,Taiwan*,23.7,121.0,1,1,3
,Italy,41.8719,12.5674,0,0,0
,United Kingdom,55.3781,-3.436,0,0,2
St Martin,France,18.0708,-63.0501,0,0,0
,France,46.2276,2.2137,0,0,2
,Viet Nam,14.0583,108.2772,0,2,2
"""

GLOBAL_DEATHS_CSV = """\
Province/State,Country/Region,Lat,Long,1/22/20,1/23/20,1/24/20
Anhui,China,31.8257,117.2264,0,0,0
Beijing,China,40.1824,116.4142,0,0,0
Hubei,China,30.9756,112.2707,17,17,24
,Taiwan*,23.7,121.0,0,0,0
,Italy,41.8719,12.5674,0,0,0
"""

US_CONFIRMED_CSV = """\
UID,iso2,iso3,code3,FIPS,Admin2,Province_State,Country_Region,Lat,Long_,Combined_Key,1/22/20,1/23/20
84001001,US,USA,840,1001.0,Autauga,Alabama,US,32.5395,-86.6441,"Autauga, Alabama, US",0,5
84001003,US,USA,840,1003.0,Baldwin,Alabama,US,30.7277,-87.7221,"Baldwin, Alabama, US",0,150
84053033,US,USA,840,53033.0,King,Washington,US,47.4914,-121.8346,"King, Washington, US",1,1
"""

US_STATES_CSV = """\
date,state,fips,cases,deaths
2020-03-01,Washington,53,10,1
2020-03-01,New York,36,1,0
2020-03-01,California,06,12,0
2020-03-02,Washington,53,18,6
2020-03-02,New York,36,1,0
2020-03-02,California,06,21,0
2020-03-03,Washington,53,27,9
2020-03-03,New York,36,2,0
2020-03-03,California,06,25,0
"""

GLOBE_CSV = """\
location,lat,long,total_cases,total_deaths
Italy,41.8719,12.5674,26000000,190000
Japan,36.2048,138.2529,33000000,74000
Iceland,64.9631,-19.0208,209000,200
United States,37.0902,-95.7129,103000000,1120000
"""


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Write small versions of every source file and return their folder."""
    root = tmp_path / "data"
    root.mkdir()
    files = {
        "time_series_covid19_confirmed_global.csv": GLOBAL_CONFIRMED_CSV,
        "time_series_covid19_deaths_global.csv": GLOBAL_DEATHS_CSV,
        "time_series_covid19_confirmed_US.csv": US_CONFIRMED_CSV,
        "us-states.csv": US_STATES_CSV,
        "CovidDataFor3DPlots.csv": GLOBE_CSV,
    }
    for name, content in files.items():
        (root / name).write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def atlas_config(data_dir: Path, tmp_path: Path) -> PipelineConfig:
    """Pipeline configuration pointing at the sample data."""
    return PipelineConfig(
        project="test-atlas",
        data_paths=DataPathsConfig(data_root=data_dir),
        output=OutputConfig(output_root=tmp_path / "output"),
    )


@pytest.fixture
def aggregated_table() -> pd.DataFrame:
    """Aggregated series table with three date columns."""
    return pd.DataFrame(
        {
            "entity": ["Brazil", "Italy", "Japan", "Peru"],
            "lat": [-14.2, 41.9, 36.2, -9.2],
            "lon": [-51.9, 12.6, 138.3, -75.0],
            "1/22/20": [0.0, 0.0, 2.0, 0.0],
            "1/23/20": [0.0, 3.0, 50.0, 0.0],
            "1/24/20": [0.0, 150.0, 99.0, 100.0],
        }
    )


@pytest.fixture
def globe_points() -> pd.DataFrame:
    """Globe points covering several death buckets, largest first."""
    return pd.DataFrame(
        {
            "entity": ["United States", "Italy", "Japan", "Iceland", "Peru"],
            "lat": [37.1, 41.9, 36.2, 65.0, -9.2],
            "lon": [-95.7, 12.6, 138.3, -19.0, -75.0],
            "value": [1_120_000.0, 190_000.0, 74_000.0, 200.0, 220_000.0],
        }
    )
