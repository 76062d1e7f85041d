"""
Adapter Registry - Program to adapter lookup.
"""
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

from performance_engine.core.exceptions import UnsupportedProgramError
from performance_engine.core.logging import get_logger
from performance_engine.models.basketball import BasketballSession
from performance_engine.models.football import FootballSession
from performance_engine.models.performance import PerformanceSession, ProgramType
from performance_engine.models.swimming import SwimmingSession
from performance_engine.services.performance.programs import (
    BasketballPerformanceAdapter,
    FootballPerformanceAdapter,
    ProgramPerformanceAdapter,
    SwimmingPerformanceAdapter,
)

logger = get_logger(__name__)

SUPPORTED_PROGRAMS = (
    ProgramType.SWIMMING,
    ProgramType.BASKETBALL,
    ProgramType.FOOTBALL,
)


def _create_adapter(program: ProgramType) -> ProgramPerformanceAdapter:
    match program:
        case ProgramType.SWIMMING:
            return SwimmingPerformanceAdapter()
        case ProgramType.BASKETBALL:
            return BasketballPerformanceAdapter()
        case ProgramType.FOOTBALL:
            return FootballPerformanceAdapter()
        case ProgramType.MUSIC | ProgramType.CODING | ProgramType.TENNIS | ProgramType.SOCCER:
            raise UnsupportedProgramError(program.value)


def build_adapter_registry() -> Mapping[ProgramType, ProgramPerformanceAdapter]:
    """Read-only mapping of every supported program to its adapter."""
    return MappingProxyType({program: _create_adapter(program) for program in SUPPORTED_PROGRAMS})


def coerce_program(program: Union[str, ProgramType]) -> ProgramType:
    """
    Resolve a program selector.

    Raises:
        UnsupportedProgramError: If the name is not an academy program
    """
    if isinstance(program, ProgramType):
        return program
    try:
        return ProgramType(str(program).strip().lower())
    except ValueError:
        logger.warning("Unknown program requested", program=program)
        raise UnsupportedProgramError(str(program)) from None


def lookup_adapter(
    registry: Mapping[ProgramType, ProgramPerformanceAdapter],
    program: Union[str, ProgramType],
) -> ProgramPerformanceAdapter:
    program = coerce_program(program)
    adapter = registry.get(program)
    if adapter is None:
        logger.warning("No performance adapter for program", program=program.value)
        raise UnsupportedProgramError(program.value)
    return adapter


_registry = build_adapter_registry()


def get_program_adapter(program: Union[str, ProgramType]) -> ProgramPerformanceAdapter:
    """
    Get the performance adapter for a program.

    Args:
        program: ProgramType member or its value ("swimming", ...)

    Returns:
        The shared adapter instance

    Raises:
        UnsupportedProgramError: For programs without an adapter
    """
    return lookup_adapter(_registry, program)


def parse_session(data: Dict[str, Any]) -> PerformanceSession:
    """Validate a raw session dict into the model of its program."""
    program = coerce_program(data.get("program", ""))
    match program:
        case ProgramType.SWIMMING:
            return SwimmingSession.model_validate(data)
        case ProgramType.BASKETBALL:
            return BasketballSession.model_validate(data)
        case ProgramType.FOOTBALL:
            return FootballSession.model_validate(data)
        case _:
            return PerformanceSession.model_validate(data)
