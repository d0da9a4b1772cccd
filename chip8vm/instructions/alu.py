"""CHIP-8 ALU operations (8xxx).

Each operation maps ``(vx, vy)`` to ``(result, vf)``; ``vf`` is ``None`` for
operations that leave the flag register alone.
"""

from typing import Optional, Tuple

from chip8vm.constants import FLAG_REGISTER
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.instructions.system import advance

AluResult = Tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = 1 iff VX > VY."""
    return (vx - vy) & 0xFF, int(vx > vy)


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 0x01


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 iff VY > VX."""
    return (vy - vx) & 0xFF, int(vy > vx)


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, (vx >> 7) & 0x01


ALU_OPERATIONS = {
    0x0: alu_set,
    0x1: alu_or,
    0x2: alu_and,
    0x3: alu_xor,
    0x4: alu_add,
    0x5: alu_sub_xy,
    0x6: alu_shift_right,
    0x7: alu_sub_yx,
    0xE: alu_shift_left,
}


def make_alu_instruction(operation):
    """Wrap an ALU operation as an instruction handler."""
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = int(state.V[instruction.x])
        vy = int(state.V[instruction.y])
        result, vf = operation(vx, vy)

        # The flag is written last so it wins when X is F.
        new_V = state.V.at[instruction.x].set(result)
        if vf is not None:
            new_V = new_V.at[FLAG_REGISTER].set(vf)
        return advance(state.replace(V=new_V))
    alu_instruction.__name__ = f"execute_{operation.__name__}"
    alu_instruction.__doc__ = operation.__doc__
    return alu_instruction


ALU_INSTRUCTIONS = {n: make_alu_instruction(op) for n, op in ALU_OPERATIONS.items()}
