# utils/catalog.py
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    region: str  # "North" | "Central" | "South"
    description: Optional[str] = None


@dataclass(frozen=True)
class Costume:
    id: str
    name: str
    ethnic_group: str

    @property
    def short_name(self) -> str:
        return self.name.replace("Trang phục ", "")


# =========================
# Locations
# =========================
LOCATIONS: Tuple[Location, ...] = (
    # North
    Location("sapa", "Sa Pa", "North"),
    Location("fansipan", "Đỉnh Fansipan", "North"),
    Location("babe", "Hồ Ba Bể", "North"),
    Location("dongvan", "Cao nguyên đá Đồng Văn", "North"),
    Location("tamdao", "Tam Đảo", "North"),
    # Central
    Location("haivan", "Đèo Hải Vân", "Central"),
    Location("banahills", "Bà Nà Hills", "Central"),
    Location("sondoong", "Hang Sơn Đoòng", "Central"),
    Location("culaocham", "Cù Lao Chàm", "Central"),
    Location("vinhhy", "Vịnh Vĩnh Hy", "Central"),
    # South
    Location("phuquoc", "Phú Quốc", "South"),
    Location("condao", "Côn Đảo", "South"),
    Location("trasu", "Rừng tràm Trà Sư", "South"),
    Location("muine", "Mũi Né", "South"),
    Location("naden", "Núi Bà Đen", "South"),
)

REGION_LABELS: Dict[str, str] = {
    "North": "Miền Bắc",
    "Central": "Miền Trung",
    "South": "Miền Nam",
}

# =========================
# Costumes
# =========================
COSTUMES: Tuple[Costume, ...] = (
    Costume("tay", "Trang phục Tày", "Tày"),
    Costume("thai", "Trang phục Thái", "Thái"),
    Costume("muong", "Trang phục Mường", "Mường"),
    Costume("hoa", "Trang phục Hoa", "Hoa"),
    Costume("khmer", "Trang phục Khmer", "Khmer"),
    Costume("nung", "Trang phục Nùng", "Nùng"),
    Costume("hmong", "Trang phục H'Mông", "H'Mông"),
    Costume("dao", "Trang phục Dao", "Dao"),
)

DEFAULT_LOCATION = LOCATIONS[0].name
DEFAULT_COSTUME = COSTUMES[0].name


def locations_by_region() -> List[Tuple[str, List[Location]]]:
    """Locations grouped for the picker, regions in display order."""
    return [
        (region, [loc for loc in LOCATIONS if loc.region == region])
        for region in REGION_LABELS
    ]


def is_known_location(name: str) -> bool:
    return any(loc.name == name for loc in LOCATIONS)


def is_known_costume(name: str) -> bool:
    return any(c.name == name for c in COSTUMES)
