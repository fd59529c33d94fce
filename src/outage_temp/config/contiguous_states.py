# Reference list for decoding NOAA nClimDiv statewide identifiers
# The statewide file numbers the contiguous states alphabetically, skipping Alaska and Hawaii

from typing import Dict, List, NamedTuple


class StateReference(NamedTuple):
    """
    I use this structure to keep a state's NOAA position next to its name
    The position is what the encoded identifier refers to, the name is what the outage data uses
    """

    noaa_code: str
    name: str


# 48 contiguous states in the order NOAA assigns statewide codes 001-048
CONTIGUOUS_STATE_REFERENCES: List[StateReference] = [
    StateReference("001", "Alabama"),
    StateReference("002", "Arizona"),
    StateReference("003", "Arkansas"),
    StateReference("004", "California"),
    StateReference("005", "Colorado"),
    StateReference("006", "Connecticut"),
    StateReference("007", "Delaware"),
    StateReference("008", "Florida"),
    StateReference("009", "Georgia"),
    StateReference("010", "Idaho"),
    StateReference("011", "Illinois"),
    StateReference("012", "Indiana"),
    StateReference("013", "Iowa"),
    StateReference("014", "Kansas"),
    StateReference("015", "Kentucky"),
    StateReference("016", "Louisiana"),
    StateReference("017", "Maine"),
    StateReference("018", "Maryland"),
    StateReference("019", "Massachusetts"),
    StateReference("020", "Michigan"),
    StateReference("021", "Minnesota"),
    StateReference("022", "Mississippi"),
    StateReference("023", "Missouri"),
    StateReference("024", "Montana"),
    StateReference("025", "Nebraska"),
    StateReference("026", "Nevada"),
    StateReference("027", "New Hampshire"),
    StateReference("028", "New Jersey"),
    StateReference("029", "New Mexico"),
    StateReference("030", "New York"),
    StateReference("031", "North Carolina"),
    StateReference("032", "North Dakota"),
    StateReference("033", "Ohio"),
    StateReference("034", "Oklahoma"),
    StateReference("035", "Oregon"),
    StateReference("036", "Pennsylvania"),
    StateReference("037", "Rhode Island"),
    StateReference("038", "South Carolina"),
    StateReference("039", "South Dakota"),
    StateReference("040", "Tennessee"),
    StateReference("041", "Texas"),
    StateReference("042", "Utah"),
    StateReference("043", "Vermont"),
    StateReference("044", "Virginia"),
    StateReference("045", "Washington"),
    StateReference("046", "West Virginia"),
    StateReference("047", "Wisconsin"),
    StateReference("048", "Wyoming"),
]

CONTIGUOUS_STATES: List[str] = [state.name for state in CONTIGUOUS_STATE_REFERENCES]


def noaa_code_to_name() -> Dict[str, str]:
    """Fixed NOAA code -> state name mapping, usable as an injected reconciler mapping."""
    return {state.noaa_code: state.name for state in CONTIGUOUS_STATE_REFERENCES}
