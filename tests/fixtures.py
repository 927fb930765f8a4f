# type: ignore
import pytest

import unit_utils


@pytest.fixture
def with_amplifier():
    yield unit_utils.load_test_program('amplifier_43210')


@pytest.fixture
def with_feedback():
    yield unit_utils.load_test_program('feedback_139629729')


@pytest.fixture
def with_program_file(tmp_path):
    def write(contents: str, name: str = 'program.txt'):
        path = tmp_path / name
        path.write_text(contents)
        return path

    yield write
