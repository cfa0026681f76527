"""
Sample data fixtures for testing

Snapshot payloads shaped like the JSON the external aggregation process
writes, small enough to check every derived number by hand.
"""

import copy
import json
import tempfile
from pathlib import Path

from patient_insights.utils.models import DashboardSnapshot

SAMPLE_PAYLOAD = {
    'totalPatients': 1000,
    'genderDistribution': {'Female': 520, 'Male': 480},
    'ethnicityDistribution': {
        'White - British': 610,
        'White - Irish': 90,
        'Asian or Asian British - Indian': 80,
        'Asian or Asian British - Pakistani': 60,
        'Mixed - White and Asian': 40,
        'Black or Black British - African': 35,
        'Other - Not stated': 85,
    },
    'ageGroups': {
        '0-17': 180,
        '18-29': 150,
        '30-44': 170,
        '45-59': 190,
        '60-74': 200,
        '75-99': 100,
        '100+': 10,
    },
    'prescriberStats': {
        'PATEL, Anita (GP)': 240,
        'HUGHES, Robert (GP)': 210,
        'OKAFOR, Chidi (GP)': 190,
        'MORGAN, Sian (GP)': 160,
        'LEE, David (GP)': 120,
        'Locum Prescriber': 80,
    },
    'surgeryStats': {
        'Rother House': 710,
        'Avon Valley Practice': 290,
    },
    'contactAvailability': {
        'homePhone': 150,
        'mobilePhone': 600,
        'noContact': 250,
    },
}


def create_sample_payload(**overrides):
    """
    Deep copy of SAMPLE_PAYLOAD with top-level keys replaced.

    Returns:
        dict: JSON-compatible snapshot payload
    """
    payload = copy.deepcopy(SAMPLE_PAYLOAD)
    payload.update(overrides)
    return payload


def create_sample_snapshot(**overrides):
    """
    Validated DashboardSnapshot built from the sample payload.

    Returns:
        DashboardSnapshot
    """
    return DashboardSnapshot.from_dict(create_sample_payload(**overrides))


def create_sample_json_file(payload=None, output_path=None):
    """
    Write a snapshot payload to a JSON file.

    Args:
        payload: Payload to write. Defaults to SAMPLE_PAYLOAD.
        output_path: Optional path. If None, creates a temp file.

    Returns:
        Path: Path to the written file
    """
    if output_path is None:
        temp_file = tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False)
        output_path = temp_file.name
        temp_file.close()

    Path(output_path).write_text(json.dumps(payload if payload is not None else SAMPLE_PAYLOAD))
    return Path(output_path)
