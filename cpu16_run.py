import csv
import logging

import click

from cpu16_dis import UNKNOWN_LINE, format_instruction, read_program, show
from cpu16_isa import MASK32, NUM_REGS, SPECS, UNKNOWN, DivisionByZero, decode

logger = logging.getLogger(__name__)

def execute(ins, regs: list[int], emit) -> None:
    # Выполнение одной декодированной команды над регистр-файлом regs.
    if ins.op == UNKNOWN:
        emit(UNKNOWN_LINE)
        return

    _, fields, action = SPECS[ins.opcode]

    # WRITE: печать значения r1.
    if action is None:
        emit(str(regs[ins.r1]))
        return

    # Операнды после r1: регистр читаем из regs, константу берём как есть.
    args = []
    for name, kind in fields[1:]:
        v = ins.operand(name, kind)
        args.append(regs[v] if kind == "reg" else v)

    # Результат считаем до записи, чтобы при ошибке r1 не менялся.
    try:
        result = action(*args)
    except ZeroDivisionError:
        raise DivisionByZero(ins, format_instruction(ins)) from None

    # 32 бита без знака, переполнение заворачивается.
    regs[ins.r1] = result & MASK32

def run_program(program: list[int], emit=click.echo) -> list[int]:
    # Регистр-файл. R0..R15, свой на каждый запуск.
    regs = [0] * NUM_REGS

    # Переходов нет, команды идут строго по порядку.
    for pc, word in enumerate(program):
        ins = decode(word)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%d: 0x%08X %s", pc, word, format_instruction(ins))
        execute(ins, regs, emit)

    return regs

def dump_registers(regs: list[int], path: str) -> None:
    # CSV дамп регистров: register,value
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["register", "value"])
        for i, v in enumerate(regs):
            w.writerow([f"R{i}", v])

@click.command()
@click.argument("program_bin", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--dump", "dump_csv", type=click.Path(dir_okay=False), help="сохранить регистры в CSV")
@click.option("--listing", is_flag=True, help="перед выполнением напечатать листинг")
@click.option("-v", "--verbose", is_flag=True, help="отладочный вывод по командам")
def main(program_bin, dump_csv, listing, verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    program = read_program(program_bin)
    if listing:
        show(program)

    click.echo("EXECUTION:")
    try:
        regs = run_program(program, click.echo)
    except DivisionByZero as e:
        raise click.ClickException(str(e))
    click.echo()

    # После выполнения сохраняем дамп регистров.
    if dump_csv:
        dump_registers(regs, dump_csv)

if __name__ == "__main__":
    main()
