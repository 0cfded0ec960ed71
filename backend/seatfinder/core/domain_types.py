"""Domain Types — categories, columns and the closed category-to-field table.

Invariants:
    - Category has exactly 18 members; CATEGORY_COLUMNS maps each to exactly one
      rank Column (total, injective) — verified at import, RuntimeError otherwise
    - Column order is canonical: 4 identity columns, then rank columns in Category order
    - resolve_categories() never raises — unknown selectors resolve to ()
    - NO_FILTER ("All"), "" and None all mean "no filter" for a dimension

Design Decisions:
    - str Enums: Category values are the display labels, Column values are the wire
      field names, so both serialize to JSON without custom encoders
    - Caste groups (multi-caste selector) expand through the same Category table:
      no second string-to-field lookup exists anywhere
"""

from enum import Enum
from typing import NewType, Union


# ─── Identity / Value Types ─────────────────────────────────────

RecordId = NewType("RecordId", str)

# Rank values stay exactly as received; parsing happens only for evaluation.
RankValue = Union[int, float, str, None]

NO_FILTER = "All"


# ─── Enums ───────────────────────────────────────────────────────

class Category(str, Enum):
    """The 18 admission-quota categories, in canonical order."""
    OC_BOYS = "OC Boys"
    OC_GIRLS = "OC Girls"
    BC_A_BOYS = "BC-A Boys"
    BC_A_GIRLS = "BC-A Girls"
    BC_B_BOYS = "BC-B Boys"
    BC_B_GIRLS = "BC-B Girls"
    BC_C_BOYS = "BC-C Boys"
    BC_C_GIRLS = "BC-C Girls"
    BC_D_BOYS = "BC-D Boys"
    BC_D_GIRLS = "BC-D Girls"
    BC_E_BOYS = "BC-E Boys"
    BC_E_GIRLS = "BC-E Girls"
    SC_BOYS = "SC Boys"
    SC_GIRLS = "SC Girls"
    ST_BOYS = "ST Boys"
    ST_GIRLS = "ST Girls"
    EWS_GEN_OU = "EWS GEN OU"
    EWS_GIRLS_OU = "EWS Girls OU"


class CasteGroup(str, Enum):
    """Multi-caste selector keys — each expands to one or more Categories."""
    OC = "oc"
    BC_A = "bcA"
    BC_B = "bcB"
    BC_C = "bcC"
    BC_D = "bcD"
    BC_E = "bcE"
    SC = "sc"
    ST = "st"
    EWS_GEN_OU = "ewsGenOu"
    EWS_GIRLS_OU = "ewsGirlsOu"


class Column(str, Enum):
    """Result columns. Values are the source's JSON field names."""
    INST_CODE = "instCode"
    INSTITUTE_NAME = "instituteName"
    BRANCH_CODE = "branchCode"
    DIST_CODE = "distCode"
    OC_BOYS = "ocBoys"
    OC_GIRLS = "ocGirls"
    BC_A_BOYS = "bcABoys"
    BC_A_GIRLS = "bcAGirls"
    BC_B_BOYS = "bcBBoys"
    BC_B_GIRLS = "bcBGirls"
    BC_C_BOYS = "bcCBoys"
    BC_C_GIRLS = "bcCGirls"
    BC_D_BOYS = "bcDBoys"
    BC_D_GIRLS = "bcDGirls"
    BC_E_BOYS = "bcEBoys"
    BC_E_GIRLS = "bcEGirls"
    SC_BOYS = "scBoys"
    SC_GIRLS = "scGirls"
    ST_BOYS = "stBoys"
    ST_GIRLS = "stGirls"
    EWS_GEN_OU = "ewsGenOu"
    EWS_GIRLS_OU = "ewsGirlsOu"


class ViewPhase(str, Enum):
    """Request lifecycle of a catalogue view."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


IDENTITY_COLUMNS: tuple[Column, ...] = (
    Column.INST_CODE,
    Column.INSTITUTE_NAME,
    Column.BRANCH_CODE,
    Column.DIST_CODE,
)


# ─── Category → rank field table ────────────────────────────────

CATEGORY_COLUMNS: dict[Category, Column] = {
    Category.OC_BOYS: Column.OC_BOYS,
    Category.OC_GIRLS: Column.OC_GIRLS,
    Category.BC_A_BOYS: Column.BC_A_BOYS,
    Category.BC_A_GIRLS: Column.BC_A_GIRLS,
    Category.BC_B_BOYS: Column.BC_B_BOYS,
    Category.BC_B_GIRLS: Column.BC_B_GIRLS,
    Category.BC_C_BOYS: Column.BC_C_BOYS,
    Category.BC_C_GIRLS: Column.BC_C_GIRLS,
    Category.BC_D_BOYS: Column.BC_D_BOYS,
    Category.BC_D_GIRLS: Column.BC_D_GIRLS,
    Category.BC_E_BOYS: Column.BC_E_BOYS,
    Category.BC_E_GIRLS: Column.BC_E_GIRLS,
    Category.SC_BOYS: Column.SC_BOYS,
    Category.SC_GIRLS: Column.SC_GIRLS,
    Category.ST_BOYS: Column.ST_BOYS,
    Category.ST_GIRLS: Column.ST_GIRLS,
    Category.EWS_GEN_OU: Column.EWS_GEN_OU,
    Category.EWS_GIRLS_OU: Column.EWS_GIRLS_OU,
}

CASTE_GROUPS: dict[CasteGroup, tuple[Category, ...]] = {
    CasteGroup.OC: (Category.OC_BOYS, Category.OC_GIRLS),
    CasteGroup.BC_A: (Category.BC_A_BOYS, Category.BC_A_GIRLS),
    CasteGroup.BC_B: (Category.BC_B_BOYS, Category.BC_B_GIRLS),
    CasteGroup.BC_C: (Category.BC_C_BOYS, Category.BC_C_GIRLS),
    CasteGroup.BC_D: (Category.BC_D_BOYS, Category.BC_D_GIRLS),
    CasteGroup.BC_E: (Category.BC_E_BOYS, Category.BC_E_GIRLS),
    CasteGroup.SC: (Category.SC_BOYS, Category.SC_GIRLS),
    CasteGroup.ST: (Category.ST_BOYS, Category.ST_GIRLS),
    CasteGroup.EWS_GEN_OU: (Category.EWS_GEN_OU,),
    CasteGroup.EWS_GIRLS_OU: (Category.EWS_GIRLS_OU,),
}


def _verify_category_columns() -> tuple[Column, ...]:
    """Check the category table is total and injective; return rank columns in order."""
    missing = [c.value for c in Category if c not in CATEGORY_COLUMNS]
    if missing:
        raise RuntimeError(f"Categories without a rank column: {missing}")
    columns = [CATEGORY_COLUMNS[c] for c in Category]
    if len(set(columns)) != len(columns):
        raise RuntimeError("A rank column is mapped to more than one category")
    if set(columns) & set(IDENTITY_COLUMNS):
        raise RuntimeError("Identity column used as a rank column")
    if len(columns) != 18:
        raise RuntimeError(f"Expected 18 categories, found {len(columns)}")
    ungrouped = set(Category) - {c for cats in CASTE_GROUPS.values() for c in cats}
    if ungrouped:
        raise RuntimeError(f"Categories missing from caste groups: {sorted(ungrouped)}")
    return tuple(columns)


RANK_COLUMNS: tuple[Column, ...] = _verify_category_columns()


# ─── Selector resolution ─────────────────────────────────────────

def is_active(selector: str | None) -> bool:
    """True when a filter dimension holds a real value (not a no-filter sentinel)."""
    return selector not in (None, "", NO_FILTER)


def resolve_categories(selector: str | None) -> tuple[Category, ...]:
    """Resolve a caste selector (category label or group key) to Categories.

    Inactive selectors and unknown tags both resolve to (); callers use
    is_active() to tell them apart.
    """
    if not is_active(selector):
        return ()
    try:
        return (Category(selector),)
    except ValueError:
        pass
    try:
        return CASTE_GROUPS[CasteGroup(selector)]
    except ValueError:
        return ()


# ─── Option catalogues (dropdown values) ────────────────────────

BRANCH_CODES: tuple[str, ...] = (
    "CIV", "CSE", "ECE", "MEC", "CSD", "CSM", "EEE", "INF", "PHM", "AGR", "AIM",
    "MIN", "PET", "EIE", "CAD", "AID", "AUT", "CSC", "COS", "CAI", "DS", "ECA",
    "EVT", "FDE", "CHE", "PEE", "PHE", "PHD", "CS", "CIT", "CSG", "CSB", "CSO",
    "CIC", "CBA", "EII", "IOT", "ASE", "CSER", "AI", "CSEB", "BIO", "GIN", "IST",
    "MET", "NAM", "MRB", "ECM", "CSS", "CST", "ECT", "RBT", "FDT", "CSN", "CCC",
    "CIA", "EBM", "CN", "CSBS", "CSW", "MMM", "BDT", "SWE", "GDT",
)

DISTRICT_CODES: tuple[str, ...] = (
    "HYD", "MDL", "RR", "KGM", "SRP", "WGL", "KHM", "MED", "SRD", "KMR", "NZB",
    "SDP", "JTL", "MHB", "PDL", "SRC", "WNP", "MBN", "HNK", "NLG", "YBG",
)
