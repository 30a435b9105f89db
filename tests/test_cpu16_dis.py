import pytest
from click.testing import CliRunner

from cpu16_dis import disassemble, main
from cpu16_isa import REFERENCE_PROGRAM, encode

REFERENCE_LISTING = [
    "MOVhi R0, 1",
    "WRITE R0",
    "DIVi R1, R0, 256",
    "WRITE R1",
    "ADDi R2, R1, 16",
    "WRITE R2",
    "SUBi R3, R1, 16",
    "WRITE R3",
    "ADD R3, R2, R3",
    "WRITE R3",
    "SUB R2, R3, R2",
    "WRITE R2",
    "SUB R3, R3, R2",
    "WRITE R3",
    "ADD R1, R2, R3",
    "WRITE R1",
    "MULi R1, R1, 16",
    "WRITE R1",
    "DIV R0, R0, R1",
    "WRITE R0",
]

@pytest.mark.parametrize("word, line", [
    (encode("WRITE", 7), "WRITE R7"),
    (encode("MOV", 1, 15), "MOV R1, R15"),
    (encode("MOVli", 2, 0, 65535), "MOVli R2, 65535"),
    (encode("MOVhi", 3, 0, 42), "MOVhi R3, 42"),
    (encode("ADD", 4, 5, 6), "ADD R4, R5, R6"),
    (encode("ADDi", 4, 5, 6), "ADDi R4, R5, 6"),
    (encode("SUB", 7, 8, 9), "SUB R7, R8, R9"),
    (encode("SUBi", 7, 8, 900), "SUBi R7, R8, 900"),
    (encode("MUL", 10, 11, 12), "MUL R10, R11, R12"),
    (encode("MULi", 10, 11, 12), "MULi R10, R11, 12"),
    (encode("DIV", 13, 14, 15), "DIV R13, R14, R15"),
    (encode("DIVi", 13, 14, 0), "DIVi R13, R14, 0"),
])
def test_every_opcode(word, line):
    assert disassemble([word]) == [line]

def test_reference_listing():
    assert disassemble(REFERENCE_PROGRAM) == REFERENCE_LISTING

def test_unknown_does_not_stop_listing():
    lines = disassemble([0x00000000, 0x53100000, 0xFF123456])
    assert lines == ["UNKNOWN INSTRUCTION", "WRITE R1", "UNKNOWN INSTRUCTION"]

def test_disassemble_is_repeatable():
    assert disassemble(REFERENCE_PROGRAM) == disassemble(REFERENCE_PROGRAM)
    assert disassemble([]) == []

def test_cli_builtin_program():
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 0
    assert result.output == "INSTRUCTIONS:\n" + "\n".join(REFERENCE_LISTING) + "\n\n"

def test_cli_program_file(tmp_path):
    path = tmp_path / "prog.bin"
    path.write_bytes(b"".join(w.to_bytes(4, "little") for w in [0x55A0002A, 0x00000000]))
    result = CliRunner().invoke(main, [str(path)])
    assert result.exit_code == 0
    assert result.output == "INSTRUCTIONS:\nMOVli R10, 42\nUNKNOWN INSTRUCTION\n\n"

def test_cli_bad_program_file(tmp_path):
    path = tmp_path / "prog.bin"
    path.write_bytes(b"\x00\x00\x00")
    result = CliRunner().invoke(main, [str(path)])
    assert result.exit_code == 1
    assert "не кратен" in result.output
