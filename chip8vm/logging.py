"""Console logging and cycle tracing for the CHIP-8 interpreter.

Provides a small levelled console logger and a tracer that renders the
post-cycle machine snapshot (last opcode, pc, stack and registers).
"""

import os
import sys
import time
from typing import Any, Dict, Optional

from tqdm import tqdm

from chip8vm.stack import peek


LOG_LEVEL_ENV = "CHIP8_LOG_LEVEL"
TRACE_ENV = "CHIP8_TRACE"


class ConsoleLogger:
    """Console logger with levels, colors and elapsed-time stamps."""

    level_order = {
        "DEBUG": 0,
        "INFO": 1,
        "WARNING": 2,
        "ERROR": 3,
        "CRITICAL": 4,
    }

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: Optional[str] = None,
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = (log_level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper()
        self.stream = stream
        out = stream or sys.stdout
        self.use_colors = use_colors and hasattr(out, "isatty") and out.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]}
        )

    def set_level(self, level: str):
        self.log_level = level.upper()

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(self.log_level, 1)

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            print(self._format_message(level, message), file=self.stream or sys.stdout, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def get_logger(name: str = "chip8vm") -> ConsoleLogger:
    """Return the shared logger for ``name``, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(name)
    return _loggers[name]


def trace_enabled() -> bool:
    return os.environ.get(TRACE_ENV, "0") not in ("", "0")


def snapshot(state) -> Dict[str, Any]:
    """Collect the post-cycle machine state as plain Python values."""
    return {
        "opcode": int(state.last_instruction),
        "pc": int(state.pc),
        "sp": int(state.stack.pointer),
        "stack": peek(state.stack),
        "I": int(state.I),
        "V": tuple(int(v) for v in state.V),
        "delay_timer": int(state.delay_timer),
        "sound_timer": int(state.sound_timer),
    }


def format_snapshot(snap: Dict[str, Any]) -> str:
    """Render a snapshot as a single trace line."""
    registers = " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(snap["V"]))
    stack = ",".join(f"{address:03X}" for address in snap["stack"]) or "-"
    return (
        f"op={snap['opcode']:04X} pc={snap['pc']:03X} sp={snap['sp']:d} "
        f"stack=[{stack}] I={snap['I']:03X} DT={snap['delay_timer']:d} "
        f"ST={snap['sound_timer']:d} {registers}"
    )


class CycleTracer:
    """Logs a snapshot of the machine after every traced cycle."""

    def __init__(self, logger: Optional[ConsoleLogger] = None, enabled: Optional[bool] = None):
        self.logger = logger or get_logger("chip8vm.trace")
        self.enabled = trace_enabled() if enabled is None else enabled
        self.cycles = 0

    def on_cycle(self, state):
        self.cycles += 1
        if self.enabled:
            self.logger.info(f"#{self.cycles:<8d} {format_snapshot(snapshot(state))}")


def build_progress_bar(total: int, desc: Optional[str] = None, **kwargs) -> tqdm:
    """Build a tqdm progress bar for headless runs."""
    if desc is None:
        desc = f"Running ({total:,} cycles)"
    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)
    return tqdm(total=total, desc=desc, unit="cycle", **kwargs)
