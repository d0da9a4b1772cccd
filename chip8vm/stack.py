"""CHIP-8 stack operations."""

from typing import Tuple

import jax.numpy as jnp

from chip8vm.constants import ADDRESS_MASK, STACK_SIZE
from chip8vm.errors import StackOverflowError, StackUnderflowError
from chip8vm.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack.

    The pointer is incremented first, then the slot it names is written.
    """
    new_pointer = int(stack.pointer) + 1
    if new_pointer >= STACK_SIZE:
        raise StackOverflowError(f"call with {STACK_SIZE} return addresses already on the stack")
    masked_address = jnp.asarray(int(address) & ADDRESS_MASK, dtype=jnp.uint16)
    new_data = stack.data.at[new_pointer].set(masked_address)
    return stack.replace(data=new_data, pointer=new_pointer)


def pop(stack: StackState) -> Tuple[StackState, int]:
    """Pop address from stack."""
    pointer = int(stack.pointer)
    if pointer < 0:
        raise StackUnderflowError("return executed with an empty stack")
    popped_address = int(stack.data[pointer])
    new_data = stack.data.at[pointer].set(0)
    return stack.replace(data=new_data, pointer=pointer - 1), popped_address


def peek(stack: StackState) -> Tuple[int, ...]:
    """Return the live return addresses, oldest first."""
    return tuple(int(address) for address in stack.data[:int(stack.pointer) + 1])
