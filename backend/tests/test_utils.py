"""Test validation and parsing helpers."""
from datetime import datetime
import pytest
from gatepass.utils.helpers import parse_datetime, file_extension
from gatepass.utils.validators import Validator

@pytest.mark.parametrize('value,expected', [
    (42, 42),
    ('  17 ', 17),
    (3.0, 3),
    (3.5, None),
    (True, None),
    ('12a', None),
    ('', None),
    (None, None),
])
def test_parse_int(value, expected):
    assert Validator.parse_int(value) == expected

def test_parse_datetime():
    assert parse_datetime('2024-05-10') == datetime(2024, 5, 10)
    assert parse_datetime('2024-05-10T10:00:00Z') == datetime(2024, 5, 10, 10, 0)
    assert parse_datetime('2024-05-10T10:00:00+02:00') == datetime(2024, 5, 10, 8, 0)
    assert parse_datetime('tomorrow') is None
    assert parse_datetime(20240510) is None

def test_file_extension():
    assert file_extension('Roster.XLSX') == 'xlsx'
    assert file_extension('noext') == ''

def test_validate_group_members():
    assert Validator.validate_group_members(None) == []
    assert Validator.validate_group_members([{'adm_no': '12'}, {'admission_no': ''}]) == []
    assert Validator.validate_group_members(['bob']) == ['group_members[0] must be an object']
    assert Validator.validate_group_members([{'adm_no': 'x1'}]) == ['group_members[0].adm_no must be a number']

def test_validate_student_registration():
    errors = Validator.validate_student_registration({
        'adm_no': 1, 'name': 'A', 'email': 'a@b.co', 'phone': '9876543210', 'sem': 2, 'password': '123'
    })
    assert errors == ['Valid name required', 'Password must be at least 6 characters']
