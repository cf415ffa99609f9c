"""
Platform Categories Value Object
Quick-filter flags an employer sets on a posting
"""
from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class PlatformCategories:
    """Board sections a job is listed under"""

    diaspora: bool = False
    nga_shtepia: bool = False  # work from home
    part_time: bool = False
    administrata: bool = False  # public administration
    sezonale: bool = False  # seasonal

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)
