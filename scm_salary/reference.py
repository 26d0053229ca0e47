"""Seed data for the ``occupation_definitions`` table."""
from __future__ import annotations

from dataclasses import dataclass

from scm_salary.models import OccupationCategory, OccupationLevel, ScmFunction

_CORE = OccupationCategory.CORE
_EXT = OccupationCategory.EXTENDED
_L = OccupationLevel
_F = ScmFunction


@dataclass(frozen=True)
class OccupationSeed:
    code: str
    name: str
    category: OccupationCategory
    level: OccupationLevel
    function: ScmFunction


OCCUPATION_SEEDS: tuple[OccupationSeed, ...] = (
    # Management
    OccupationSeed("11-3061", "Purchasing Managers", _CORE, _L.MANAGEMENT, _F.PROCUREMENT),
    OccupationSeed(
        "11-3071",
        "Transportation, Storage, and Distribution Managers",
        _CORE,
        _L.MANAGEMENT,
        _F.TRANSPORTATION,
    ),
    OccupationSeed(
        "11-9199",
        "Managers, All Other (includes Operations Managers)",
        _CORE,
        _L.MANAGEMENT,
        _F.GENERAL_OPERATIONS,
    ),
    # Professional / analytical
    OccupationSeed("13-1081", "Logisticians", _CORE, _L.CORE_PROFESSIONAL, _F.PLANNING),
    OccupationSeed(
        "13-1023",
        "Purchasing Agents, Except Wholesale, Retail, and Farm Products",
        _CORE,
        _L.CORE_PROFESSIONAL,
        _F.PROCUREMENT,
    ),
    OccupationSeed(
        "13-1022",
        "Wholesale and Retail Buyers, Except Farm Products",
        _CORE,
        _L.CORE_PROFESSIONAL,
        _F.PROCUREMENT,
    ),
    OccupationSeed(
        "13-1199",
        "Business Operations Specialists, All Other (includes Supply Chain Analysts)",
        _CORE,
        _L.CORE_PROFESSIONAL,
        _F.ANALYSIS,
    ),
    # SCM-adjacent analytical
    OccupationSeed(
        "13-1111",
        "Management Analysts (often work on supply chain optimization)",
        _CORE,
        _L.ADJACENT_ANALYTICAL,
        _F.PROCESS_OPTIMIZATION,
    ),
    OccupationSeed(
        "15-2031", "Operations Research Analysts", _CORE, _L.ADJACENT_ANALYTICAL, _F.PROCESS_OPTIMIZATION
    ),
    OccupationSeed(
        "17-2112", "Industrial Engineers", _CORE, _L.ADJACENT_ANALYTICAL, _F.PROCESS_OPTIMIZATION
    ),
    # Operational / support
    OccupationSeed(
        "43-5011", "Cargo and Freight Agents", _CORE, _L.OPERATIONAL_SUPPORT, _F.TRANSPORTATION
    ),
    OccupationSeed(
        "43-5061",
        "Production, Planning, and Expediting Clerks",
        _CORE,
        _L.OPERATIONAL_SUPPORT,
        _F.PRODUCTION_PLANNING,
    ),
    OccupationSeed(
        "43-5071",
        "Shipping, Receiving, and Traffic Clerks",
        _CORE,
        _L.OPERATIONAL_SUPPORT,
        _F.TRANSPORTATION,
    ),
    OccupationSeed("53-1047", "Traffic Technicians", _CORE, _L.OPERATIONAL_SUPPORT, _F.TRANSPORTATION),
    # Extended set
    OccupationSeed(
        "13-1021",
        "Buyers and Purchasing Agents, Farm Products",
        _EXT,
        _L.CORE_PROFESSIONAL,
        _F.PROCUREMENT,
    ),
    OccupationSeed("43-5021", "Couriers and Messengers", _EXT, _L.OPERATIONAL_SUPPORT, _F.TRANSPORTATION),
    OccupationSeed(
        "43-5052", "Postal Service Mail Carriers", _EXT, _L.OPERATIONAL_SUPPORT, _F.TRANSPORTATION
    ),
    OccupationSeed("53-7064", "Packers and Packagers, Hand", _EXT, _L.OPERATIONAL_SUPPORT, _F.OTHER),
    OccupationSeed("53-7065", "Stockers and Order Fillers", _EXT, _L.OPERATIONAL_SUPPORT, _F.OTHER),
)
