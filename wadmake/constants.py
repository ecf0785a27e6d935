import struct


# Identifiers
IWAD_MAGIC = b"IWAD"
PWAD_MAGIC = b"PWAD"

# Container kinds
WAD_TYPE_IWAD = 0  # primary resource file
WAD_TYPE_PWAD = 1  # patch applied on top of other resources

WAD_TYPE_MAGIC = {
    WAD_TYPE_IWAD: IWAD_MAGIC,
    WAD_TYPE_PWAD: PWAD_MAGIC,
}

WAD_TYPE_NAMES = {
    WAD_TYPE_IWAD: "iwad",
    WAD_TYPE_PWAD: "pwad",
}


# Header (fixed 12 bytes)
# struct: <4s i i
#  - identification[4]
#  - numlumps i32
#  - infotableofs i32 (absolute)
HEADER_STRUCT = struct.Struct("<4sii")
HEADER_SIZE = HEADER_STRUCT.size

# Infotable entry (fixed 16 bytes)
# struct: <i i 8s
#  - filepos i32 (absolute)
#  - size i32
#  - name[8] (zero padded, unterminated when exactly 8 bytes)
ENTRY_STRUCT = struct.Struct("<ii8s")

INT32_STRUCT = struct.Struct("<i")

NAME_LENGTH = 8
NAME_ENCODING = "latin-1"

INT32_MAX = 2_147_483_647
