"""Shared fixtures for the standings-pipeline test suite."""

import json

import pytest

from src.standings_pipeline.models import RaceResult, StandingEntry


# ------------------------------------------------------------------
# Raw fragment records (wire format)
# ------------------------------------------------------------------

def race_record(position=1, points=25, penalty=None, dnf=False, dns=False):
    return {
        "position": position,
        "pointsGiven": points,
        "penaltyPoints": penalty,
        "pointsTotal": points - (penalty or 0),
        "dnf": dnf,
        "dns": dns,
    }


def standing_record(driver_id, car="Porsche", points=0, score=0, races=None, **extra):
    record = {
        "position": 1,
        "id": driver_id,
        "carNum": 7,
        "car": car,
        "championshipPoints": points,
        "championshipPenalties": 0,
        "championshipScore": score,
        "pointsAdjustment": 0,
        "actualPoints": points,
        "races": races if races is not None else [],
    }
    record.update(extra)
    return record


# ------------------------------------------------------------------
# Typed models
# ------------------------------------------------------------------

def make_race(position=1, points=25, penalty=None):
    return RaceResult(
        position=position,
        points_given=points,
        penalty_points=penalty,
        points_total=points - (penalty or 0),
    )


def make_entry(driver_id, car="Porsche", points=0, score=0, races=None, **extra):
    fields = {
        "position": 1,
        "id": driver_id,
        "car_num": 7,
        "car": car,
        "championship_points": points,
        "championship_score": score,
        "races": list(races or []),
    }
    fields.update(extra)
    return StandingEntry(**fields)


# ------------------------------------------------------------------
# Intake directory
# ------------------------------------------------------------------

@pytest.fixture
def intake_dir(tmp_path):
    path = tmp_path / "intake"
    path.mkdir()
    return path


@pytest.fixture
def write_fragment(intake_dir):
    """Write a fragment (a list of class records) into the intake dir."""

    def _write(name, classes):
        path = intake_dir / name
        if isinstance(classes, str):
            path.write_text(classes, encoding="utf-8")
        else:
            path.write_text(json.dumps(classes), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def gt3_scenario(write_fragment):
    """Two fragments for GT3: Alice in both, Bob only in the second."""
    write_fragment("round1.json", [
        {"carClass": "GT3", "standings": [
            standing_record("Alice", points=10, score=5, races=[race_record(1, 10)]),
        ]},
    ])
    write_fragment("round2.json", [
        {"carClass": "GT3", "standings": [
            standing_record("Alice", points=8, score=3, races=[race_record(2, 8)]),
            standing_record("Bob", car="Ferrari", points=9, score=9,
                            races=[race_record(1, 9)]),
        ]},
    ])
