"""Shared fixtures: a two-floor building and a 3 x 4 grid."""
import copy
import json

import pytest
import yaml

from rcc_takeoff.structural import GridLine, building_from_dict


SAMPLE_BUILDING = {
    "id": "building-1",
    "name": "Test Building",
    "floors": [
        {
            "id": "floor-1",
            "level": 1,
            "name": "Ground Floor",
            "structuralSystem": {
                "numCols": 3,
                "numRows": 3,
                "cols": [
                    {"label": "A", "position": 0},
                    {"label": "B", "position": 5},
                    {"label": "C", "position": 10},
                ],
                "rows": [
                    {"label": "1", "position": 0},
                    {"label": "2", "position": 4},
                    {"label": "3", "position": 8},
                ],
            },
            "beamSpecs": [
                {
                    "id": "B1", "width": 0.3, "depth": 0.5,
                    "topBarSize": 12, "topBarQty": 2,
                    "webBarSize": 8, "webBarQty": 2,
                    "bottomBarSize": 12, "bottomBarQty": 2,
                    "stirrupSize": 8, "stirrupQty": 6,
                }
            ],
            "columnSpecs": [
                {
                    "id": "C1", "width": 0.4, "depth": 0.4, "height": 3.0,
                    "mainBarSize": 16, "mainBarQty": 8,
                    "tieSize": 10, "tieSpacing": 0.15,
                }
            ],
            "colBeamIds": ["B1", "B1", "B1", "B1", "B1", "B1"],
            "rowBeamIds": ["B1", "B1", "B1", "B1", "B1", "B1"],
            "columnIds": ["C1", "", "C1", "C1", "", "C1", "C1", "", "C1"],
            "inheritsStructural": False,
        },
        {
            "id": "floor-0",
            "level": 0,
            "name": "Foundation",
            "structuralSystem": {
                "cols": [
                    {"label": "A", "position": 0},
                    {"label": "B", "position": 5},
                    {"label": "C", "position": 10},
                ],
                "rows": [
                    {"label": "1", "position": 0},
                    {"label": "2", "position": 4},
                    {"label": "3", "position": 8},
                ],
            },
            "slabSpecs": [
                {
                    "id": "S1", "thickness": 150, "type": "one-way",
                    "mainBarSize": 12, "mainBarSpacing": 150,
                    "distributionBarSize": 10, "distributionBarSpacing": 250,
                }
            ],
            "footingSpecs": [
                {
                    "id": "F1", "type": "isolated",
                    "width": 2.0, "length": 3.0, "depth": 1.5,
                    "mainBarSize": 16, "mainBarSpacing": 150,
                    "distributionBarSize": 12, "distributionBarSpacing": 200,
                    "stirrupSize": 10, "stirrupSpacing": 0.15,
                    "topBarsRequired": False,
                }
            ],
            "slabAssignments": [
                {"id": "SA1", "slabSpecId": "S1", "startRow": "1", "endRow": "2",
                 "startCol": "A", "endCol": "B", "area": 20},
                # area measured off the grid on load
                {"id": "SA2", "slabSpecId": "S1", "startRow": "2", "endRow": "3",
                 "startCol": "B", "endCol": "C"},
                {"id": "SA3", "slabSpecId": "S9", "startRow": "1", "endRow": "1",
                 "startCol": "C", "endCol": "C", "area": 20},
            ],
            "footingAssignments": [
                {"footingSpecId": "F1", "gridPosition": "1A"},
                {"footingSpecId": "F1", "gridPosition": "3C"},
            ],
        },
    ],
}


@pytest.fixture
def building_dict():
    """Fresh copy of the sample document."""
    return copy.deepcopy(SAMPLE_BUILDING)


@pytest.fixture
def building(building_dict):
    return building_from_dict(building_dict)


@pytest.fixture
def ground_floor(building):
    return building.get_floor("floor-1")


@pytest.fixture
def foundation_floor(building):
    return building.get_floor("floor-0")


@pytest.fixture
def grid_rows():
    """Rows A-C at 4m pitch."""
    return [GridLine("A", 0), GridLine("B", 4), GridLine("C", 8)]


@pytest.fixture
def grid_cols():
    """Columns 1-4 at 5m pitch."""
    return [GridLine("1", 0), GridLine("2", 5), GridLine("3", 10), GridLine("4", 15)]


@pytest.fixture
def building_json(tmp_path, building_dict):
    path = tmp_path / "building.json"
    path.write_text(json.dumps(building_dict))
    return path


@pytest.fixture
def building_yaml(tmp_path, building_dict):
    path = tmp_path / "building.yaml"
    path.write_text(yaml.safe_dump(building_dict))
    return path
