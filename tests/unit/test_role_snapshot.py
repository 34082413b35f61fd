from types import SimpleNamespace
from uuid import uuid4

import pytest

from src.domain.errors import InvalidSnapshotError
from src.domain.role_snapshot import build_role_snapshot, validate_role_snapshot


def make_role(**overrides):
    fields = dict(
        id=uuid4(),
        campus_id=uuid4(),
        title="Usher",
        description=None,
        permissions=["doors"],
        start_date=None,
        assigned_by=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_build_snapshot_is_json_ready():
    role = make_role(permissions=["doors", "seating"])

    snapshot = build_role_snapshot([role])

    assert snapshot == [
        {
            "role_id": str(role.id),
            "campus_id": str(role.campus_id),
            "title": "Usher",
            "description": None,
            "permissions": ["doors", "seating"],
            "start_date": None,
            "assigned_by": None,
        }
    ]
    assert validate_role_snapshot(snapshot)[0].role_id == role.id


def test_build_snapshot_of_no_roles():
    assert build_role_snapshot([]) == []
    assert validate_role_snapshot([]) == []


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"permissions": ["doors", 3]},
        {"id": "not-a-uuid"},
    ],
)
def test_build_snapshot_rejects_malformed_role(overrides):
    with pytest.raises(InvalidSnapshotError):
        build_role_snapshot([make_role(**overrides)])


@pytest.mark.parametrize(
    "snapshot",
    [
        {"role_id": "x"},
        ["Usher"],
        [{"title": "Usher", "permissions": []}],
        [{"role_id": str(uuid4()), "campus_id": str(uuid4()), "title": "Usher", "permissions": "doors"}],
    ],
)
def test_validate_rejects_malformed_snapshot(snapshot):
    with pytest.raises(InvalidSnapshotError):
        validate_role_snapshot(snapshot)


def test_validate_rejects_duplicate_roles():
    item = build_role_snapshot([make_role()])[0]

    with pytest.raises(InvalidSnapshotError):
        validate_role_snapshot([item, dict(item)])
