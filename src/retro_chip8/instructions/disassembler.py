# retro_chip8/instructions/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、ニーモニックに変換します。
メモリのアクセスログを汚さないように peek で読み込みます。
"""
from typing import List

from retro_chip8.common.types import ListingRow
from retro_chip8.instructions.base import Operation
from retro_chip8.instructions.maps import lookup_kind
from retro_chip8.transport.memory import Memory

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: Memory, start_addr: int, length: int) -> List[ListingRow]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    命令として解釈できないワードは "DW" (データ) として出力します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result: List[ListingRow] = []
    end_addr = min(start_addr + length, memory.get_size())
    current_addr = start_addr

    while current_addr < end_addr:
        high = memory.peek(current_addr)
        if current_addr + 1 >= memory.get_size():
            # 末尾の奇数バイト
            result.append((current_addr, f"{high:02X}", f"DB 0x{high:02X}"))
            break
        low = memory.peek(current_addr + 1)
        opcode = (high << 8) | low

        kind = lookup_kind(opcode)
        if kind is None:
            text = f"DW 0x{opcode:04X}"
        else:
            text = str(Operation(kind=kind, opcode=opcode, address=current_addr))
        result.append((current_addr, f"{high:02X} {low:02X}", text))
        current_addr += 2

    return result
