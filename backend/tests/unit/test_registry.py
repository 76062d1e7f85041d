"""
Unit tests for adapter lookup and session parsing.
"""
from datetime import datetime

import pytest
from pydantic import ValidationError

from performance_engine.core.exceptions import UnsupportedProgramError
from performance_engine.models.basketball import BasketballSession
from performance_engine.models.performance import PerformanceSession, ProgramType
from performance_engine.models.swimming import SwimmingSession
from performance_engine.services.performance.programs import (
    BasketballPerformanceAdapter,
    FootballPerformanceAdapter,
    SwimmingPerformanceAdapter,
)
from performance_engine.services.performance.registry import (
    build_adapter_registry,
    get_program_adapter,
    parse_session,
)


class TestRegistry:
    """Tests for the program registry."""

    def test_registry_covers_supported_programs(self):
        registry = build_adapter_registry()
        assert set(registry) == {ProgramType.SWIMMING, ProgramType.BASKETBALL, ProgramType.FOOTBALL}

    def test_registry_is_read_only(self):
        registry = build_adapter_registry()
        with pytest.raises(TypeError):
            registry[ProgramType.MUSIC] = SwimmingPerformanceAdapter()

    @pytest.mark.parametrize("program, adapter_cls", [
        ("swimming", SwimmingPerformanceAdapter),
        (" Basketball ", BasketballPerformanceAdapter),
        (ProgramType.FOOTBALL, FootballPerformanceAdapter),
    ])
    def test_lookup_by_name_or_member(self, program, adapter_cls):
        assert isinstance(get_program_adapter(program), adapter_cls)

    @pytest.mark.parametrize("program", ["music", ProgramType.TENNIS, "cricket"])
    def test_unsupported_program_raises(self, program):
        with pytest.raises(UnsupportedProgramError) as excinfo:
            get_program_adapter(program)
        assert "No performance adapter" in str(excinfo.value)

    def test_unsupported_program_is_a_value_error(self):
        with pytest.raises(ValueError):
            get_program_adapter("chess")


class TestParseSession:
    """Tests for program-dispatched session parsing."""

    def test_dispatches_on_program(self):
        session = parse_session({
            "id": "s1",
            "date": "2025-03-01T09:00:00",
            "program": "swimming",
            "sessionType": "training",
            "duration": 45,
            "averagePace": 98.5,
        })
        assert isinstance(session, SwimmingSession)
        assert session.average_pace == 98.5
        assert session.date == datetime(2025, 3, 1, 9, 0)

    def test_program_specific_fields_are_validated(self):
        with pytest.raises(ValidationError):
            parse_session({
                "id": "b1",
                "date": "2025-03-01",
                "program": "basketball",
                "sessionType": "practice",
                "duration": 30,
                "skillAssessments": [{"skill": "shooting", "level": 11}],
            })

    def test_other_programs_use_generic_model(self):
        session = parse_session({
            "id": "m1",
            "date": "2025-03-01",
            "program": "music",
            "sessionType": "lesson",
            "duration": 30,
        })
        assert type(session) is PerformanceSession

    def test_subtype_rejects_wrong_program(self):
        with pytest.raises(ValidationError):
            BasketballSession(
                id="x",
                date=datetime(2025, 3, 1),
                program=ProgramType.FOOTBALL,
                session_type="practice",
                duration=10,
            )
