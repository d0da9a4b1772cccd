"""Tests for the call stack."""

import pytest
from chip8vm import StackState, StackOverflowError, StackUnderflowError, STACK_SIZE
from chip8vm.stack import push, pop, peek


def test_empty_stack_pointer():
    stack = StackState()
    assert stack.pointer == -1
    assert stack.depth == 0
    assert peek(stack) == ()


def test_push_then_pop():
    stack = push(StackState(), 0x234)
    assert stack.pointer == 0
    assert peek(stack) == (0x234,)

    stack, address = pop(stack)
    assert address == 0x234
    assert stack.pointer == -1


def test_lifo_order():
    stack = StackState()
    for address in (0x200, 0x300, 0x400):
        stack = push(stack, address)
    assert peek(stack) == (0x200, 0x300, 0x400)

    stack, address = pop(stack)
    assert address == 0x400
    stack, address = pop(stack)
    assert address == 0x300


def test_push_masks_to_address_range():
    stack = push(StackState(), 0x1234)
    assert peek(stack) == (0x234,)


def test_overflow_at_full_depth():
    stack = StackState()
    for i in range(STACK_SIZE):
        stack = push(stack, 0x200 + 2 * i)
    assert stack.depth == STACK_SIZE

    with pytest.raises(StackOverflowError):
        push(stack, 0x300)


def test_underflow_on_empty():
    with pytest.raises(StackUnderflowError):
        pop(StackState())
