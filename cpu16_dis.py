import click

from cpu16_isa import REFERENCE_PROGRAM, UNKNOWN, decode, load_program

UNKNOWN_LINE = "UNKNOWN INSTRUCTION"

def format_instruction(ins) -> str:
    # MNEMONIC R1[, R2][, R3 | IMM]
    if ins.op == UNKNOWN:
        return UNKNOWN_LINE

    args = []
    for name, kind in ins.fields:
        v = ins.operand(name, kind)
        args.append(f"R{v}" if kind == "reg" else str(v))
    return f"{ins.op} " + ", ".join(args)

def disassemble(program: list[int]) -> list[str]:
    # Неизвестные команды не прерывают листинг.
    return [format_instruction(decode(word)) for word in program]

def show(program: list[int]) -> None:
    # Печать как в исходном примере: заголовок, строки, пустая строка.
    click.echo("INSTRUCTIONS:")
    for line in disassemble(program):
        click.echo(line)
    click.echo()

def read_program(path) -> list[int]:
    # Без файла работаем со встроенной программой.
    if path is None:
        return list(REFERENCE_PROGRAM)
    with open(path, "rb") as f:
        raw = f.read()
    try:
        return load_program(raw)
    except ValueError as e:
        raise click.ClickException(str(e))

@click.command()
@click.argument("program_bin", required=False, type=click.Path(exists=True, dir_okay=False))
def main(program_bin):
    show(read_program(program_bin))

if __name__ == "__main__":
    main()
