"""
G-code and M-code description tables

Canned, human-readable phrases for the command codes recognized by the
annotator. Codes missing from these tables are described generically
instead of failing.
"""

# Letters that start a command and govern the words that follow them
COMMAND_LETTERS = frozenset("GM")

SEQUENCE_NUMBER_LETTER = "N"
TOOL_LETTER = "T"
SPINDLE_SPEED_LETTER = "S"
FIXTURE_OFFSET_LETTER = "E"
TOOL_LENGTH_LETTER = "H"

# Line prefixes that suppress tokenization of the whole line
BLOCK_DELETE_CHAR = "/"
PROGRAM_BOUNDARY_CHAR = "%"

# Lines containing any of these are kept as a single opaque word
META_COMMAND_MARKERS = ("IF", "GOTO", "=", "#", "[", "]")

LETTER_DESCRIPTIONS = {
    TOOL_LETTER: "SET TOOL",
    SPINDLE_SPEED_LETTER: "SET SPINDLE RPM",
}

G_CODE_DESCRIPTIONS = {
    0: "RAPID",
    1: "MOVE",
    2: "CLOCKWISE ARC",
    3: "COUNTERCLOCKWISE ARC",
    4: "DWELL",
    5: "NON MODAL RAPID",
    8: "NO ACCELERATION/FEED RAMP FOR SPEED",
    9: "ACCELERATION/FEED RAMP FOR ACCURACY",
    10: "PROGRAMMABLE DATA INPUT",
    15: "YZ CIRCULAR INTERPOLATION WITH A AXIS",
    17: "USE XY PLANE FOR ARCS, COMPENSATION AND, COORDINATE ROTATIONS",
    18: "USE ZX PLANE FOR ARCS, COMPENSATION AND, COORDINATE ROTATIONS",
    19: "USE YZ PLANE FOR ARCS, COMPENSATION AND, COORDINATE ROTATIONS",
    20: "VERIFY INCH MODE",
    21: "VERIFY METRIC MODE",
    28: "RETURN TO COORDINATE SYSTEM ZERO",
    29: "RETURN FROM ZERO",
    31: "PROBE TOUCH FUNCTION",
    40: "CUTTER COMPENSATION CANCEL",
    41: "CUTTER COMPENSATION LEFT",
    42: "CUTTER COMPENSATION RIGHT",
    43: "CUTTER COMPENSATION POSITIVE",
    44: "CUTTER COMPENSATION NEGATIVE",
    45: "TOOL OFFSET SINGLE EXPANSION",
    46: "TOOL OFFSET SINGLE REDUCTION",
    47: "TOOL OFFSET DOUBLE EXPANSION",
    48: "TOOL OFFSET DOUBLE REDUCTION",
    49: "TOOL LENGTH OFFSET CANCEL",
    50: "RAMP CONTROL CANCEL",
    51: "RAMP CONTROL",
    52: "COORDINATE SYSTEM SHIFT",
    53: "USE MACHINE TOOL COORDINATE SYSTEM",
    54: "USE FIXTURE OFFSET 1",
    55: "USE FIXTURE OFFSET 2",
    56: "USE FIXTURE OFFSET 3",
    57: "USE FIXTURE OFFSET 4",
    58: "USE FIXTURE OFFSET 5",
    59: "USE FIXTURE OFFSET 6",
    66: "MODAL SUBROUTINE",
    67: "CANCEL MODAL SUBROUTINE",
    68: "COORDINATE SYSTEM ROTATION",
    69: "COORDINATE SYSTEM ROTATION CANCEL",
    70: "VERIFY INCH MODE",
    71: "VERIFY METRIC MODE",
    73: "FIXED CYCLE",
    74: "FIXED CYCLE",
    75: "FIXED CYCLE",
    76: "FIXED CYCLE",
    80: "FIXED CYCLE CANCEL",
    81: "FIXED CYCLE",
    82: "FIXED CYCLE",
    83: "FIXED CYCLE",
    84: "FIXED CYCLE",
    85: "FIXED CYCLE",
    86: "FIXED CYCLE",
    87: "FIXED CYCLE",
    88: "FIXED CYCLE",
    89: "FIXED CYCLE",
    90: "ABSOLUTE POSITIONING",
    91: "INCREMENTAL POSITIONING",
    92: "SET TEMPORARY COORDINATE SYSTEM",
    93: "USE INVERSE TIME FEEDRATE",
    94: "USE FEEDRATE PER MINUTE",
    99: "RETURN TO INITIAL PLANE",
}

# Empty phrases are recognized codes that get no annotation
M_CODE_DESCRIPTIONS = {
    0: "PROGRAM STOP",
    1: "OPTIONAL PROGRAM STOP",
    2: "END OF PROGRAM",
    3: "SPINDLE CLOCKWISE",
    4: "SPINDLE COUNTERCLOCKWISE",
    5: "SPINDLE STOP",
    6: "CHANGE TOOL",
    7: "MIST COOLANT ON",
    8: "FLOOD COOLANT ON",
    9: "COOLANT OFF",
    10: "CANCEL RECIPROCATION",
    11: "X AXIS RECIPROCATION",
    12: "Y AXIS RECIPROCATION",
    13: "Z AXIS RECIPROCATION",
    14: "B AXIS RECIPROCATION",
    15: "A AXIS RECIPROCATION",
    16: "",
    17: "END OF SUBROUTINE",
    18: "AIR RATCHETING INDEXER",
    19: "SPINDLE STOP AND ORIENT",
    20: "GENERAL PURPOSE INDEXER",
    30: "END OF FILE/SUBROUTINE",
    31: "EXCHANGE PALLETS",
    32: "LOAD AND STORE PALLET A",
    33: "LOAD AND STORE PALLET A",
    41: "BELT DRIVE RANGE 150-2700 RPM",
    42: "BELT DRIVE RANGE 150-5200 RPM",
    43: "BELT DRIVE RANGE 300-10000 RPM",
    45: "EXECUTE FIXED CYCLE",
    46: "POSITIVE APPROACH",
    47: "CANCEL POSITIVE APPROACH",
    48: "POTENTIOMETER CONTROLS IN",
    49: "POTENTIOMETER CONTROLS OUT",
    -60: "FIXED CYCLE",
    -61: "FIXED CYCLE",
    -62: "FIXED CYCLE",
    63: "",
    64: "ACTIVATE MP8 PROBE",
    65: "ACTIVATE TS-20 OR TS-27 TOOL SETTER",
    66: "ACTIVATE MP12 OR MP11 PROBE",
    67: "ACTIVATE LASER PROBE",
    80: "AUTOMATIC DOORS OPEN",
    81: "AUTOMATIC DOORS CLOSE",
    90: "SET DEFAULT GAIN BASED ON SV COMMAND",
    91: "SET NORMAL GAIN FOR < 50 IMP",
    92: "SET INTERMEDIATE GAIN FOR CLOSER TRACKING",
    93: "SET HIGH GAIN FOR RIGID TAPPING CYCLE",
    94: "FEED FORWARD FUNCTION",
    95: "FEED FORWARD CANCEL",
    96: "INTERSECTIONAL CUTTER COMPENSATION CANCELED",
    97: "INTERSECTIONAL CUTTER COMPENSATION",
    98: "CALL SUBPROGRAM",
    99: "END OF SUBPROGRAM",
}
