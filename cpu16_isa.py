import operator
from dataclasses import dataclass

# Формат команды (32 бита, одно слово):
#
#   FF FF FF FF
#         ^^ ^^  R3/IMM  биты 0..15, третий регистр или константа
#       ^        R2      биты 16..19
#      ^         R1      биты 20..23
#   ^^           opcode  биты 24..31
#
# Регистров 16 (R0..R15), каждый по 32 бита без знака.

NUM_REGS = 16
MASK32 = 0xFFFFFFFF
WORD_SIZE = 4

UNKNOWN = "UNKNOWN"

class DivisionByZero(ZeroDivisionError):
    # Деление на ноль в DIV/DIVi. Регистр-файл при этом не меняется.
    def __init__(self, ins, line: str):
        super().__init__(f"деление на ноль: {line}")
        self.ins = ins

# SPECS описывает систему команд. Формат записи:
# opcode: (mnemonic, fields, action)
#
# fields  операнды в порядке вывода: (поле, kind)
#         kind: "reg" (номер регистра) или "imm" (16-битная константа)
#         первый операнд всегда r1, в него пишется результат
# action  функция от значений остальных операндов, None для WRITE
SPECS = {
    0x53: ("WRITE", [("r1", "reg")], None),
    0x54: ("MOV", [("r1", "reg"), ("r2", "reg")], lambda b: b),
    0x55: ("MOVli", [("r1", "reg"), ("r3_imm", "imm")], lambda c: c),
    0x56: ("MOVhi", [("r1", "reg"), ("r3_imm", "imm")], lambda c: c << 16),
    0x57: ("ADD", [("r1", "reg"), ("r2", "reg"), ("r3_imm", "reg")], operator.add),
    0x58: ("ADDi", [("r1", "reg"), ("r2", "reg"), ("r3_imm", "imm")], operator.add),
    0x59: ("SUB", [("r1", "reg"), ("r2", "reg"), ("r3_imm", "reg")], operator.sub),
    0x60: ("SUBi", [("r1", "reg"), ("r2", "reg"), ("r3_imm", "imm")], operator.sub),
    0x61: ("MUL", [("r1", "reg"), ("r2", "reg"), ("r3_imm", "reg")], operator.mul),
    0x62: ("MULi", [("r1", "reg"), ("r2", "reg"), ("r3_imm", "imm")], operator.mul),
    0x63: ("DIV", [("r1", "reg"), ("r2", "reg"), ("r3_imm", "reg")], operator.floordiv),
    0x64: ("DIVi", [("r1", "reg"), ("r2", "reg"), ("r3_imm", "imm")], operator.floordiv),
}

# Обратная таблица, удобна в тестах и для сборки слов вручную.
OPCODES = {spec[0]: opcode for opcode, spec in SPECS.items()}

# Программа из исходного примера.
REFERENCE_PROGRAM = [
    0x56000001, 0x53000000, 0x64100100, 0x53100000,
    0x58210010, 0x53200000, 0x60310010, 0x53300000,
    0x57320003, 0x53300000, 0x59230002, 0x53200000,
    0x59330002, 0x53300000, 0x57120003, 0x53100000,
    0x62110010, 0x53100000, 0x63000001, 0x53000000,
]

@dataclass(frozen=True)
class Instruction:
    opcode: int
    r1: int
    r2: int
    r3_imm: int

    @property
    def op(self) -> str:
        spec = SPECS.get(self.opcode)
        return spec[0] if spec else UNKNOWN

    @property
    def fields(self) -> list:
        spec = SPECS.get(self.opcode)
        return spec[1] if spec else []

    def operand(self, name: str, kind: str) -> int:
        # Для kind == "reg" в поле R3/IMM значим только младший ниббл.
        v = getattr(self, name)
        return v & 0x0F if kind == "reg" else v

def decode(word: int) -> Instruction:
    # Декодирование определено для любого слова: неизвестный opcode
    # тоже раскладывается на поля, отвергают его уже потребители.
    word &= MASK32
    return Instruction(
        opcode=(word >> 24) & 0xFF,
        r1=(word >> 20) & 0x0F,
        r2=(word >> 16) & 0x0F,
        r3_imm=word & 0xFFFF,
    )

def encode(op: str, r1: int = 0, r2: int = 0, r3_imm: int = 0) -> int:
    # Сборка слова из полей. Нужна тестам, ассемблера здесь нет.
    return (OPCODES[op] << 24) | ((r1 & 0x0F) << 20) | ((r2 & 0x0F) << 16) | (r3_imm & 0xFFFF)

def load_program(raw: bytes) -> list[int]:
    # Программа хранится как слова по 4 байта, little-endian.
    if len(raw) % WORD_SIZE:
        raise ValueError(f"размер программы {len(raw)} байт не кратен {WORD_SIZE}")
    return [int.from_bytes(raw[i:i + WORD_SIZE], "little") for i in range(0, len(raw), WORD_SIZE)]
