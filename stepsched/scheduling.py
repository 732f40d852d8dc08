"""
scheduling.py

Discrete-event simulation of N identical workers processing a
PrecedenceGraph. Each worker carries its own clock; the loop always
advances the worker whose clock is earliest.

Expose:
  - schedule(graph, workers, base_time) -> total completion time
  - simulate(...) -> ScheduleReport with the full assignment timeline
"""

import logging
from collections import namedtuple
from dataclasses import dataclass, field
from typing import List, Optional

from stepsched.errors import CycleDetected, InvalidParameters
from stepsched.steps import Step

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 5
DEFAULT_BASE_TIME = 60
IDLE_STRATEGIES = ("tick", "jump")

Assignment = namedtuple("Assignment", ["step", "worker", "start", "end"])


#################
# Worker
#################

@dataclass
class Worker:
    """
    One simulated execution slot.

    Attributes:
      - index (int): position in the pool, used for reporting
      - job (Step|None): step currently being processed
      - clock (int): time this worker frees up (busy) or was last probed (idle)
    """
    index: int
    job: Optional[Step] = None
    clock: int = 0

    @property
    def busy(self):
        return self.job is not None


def worker_priority(worker):
    """
    Selection key, compared lexicographically: (clock, busy-first).

    The worker with the earliest clock goes next. On a clock tie a busy
    worker beats an idle one, so a job finishing at time t is retired (and
    its dependents released) before any idle worker looks for work at t.
    Remaining ties go to the lowest index, since min() keeps the first.
    """
    return (worker.clock, 0 if worker.busy else 1)


@dataclass
class ScheduleReport:
    """
    Attributes:
      - total_time (int): time at which the last step completes (latest assignment end)
      - order (list of Step): steps in the order they completed
      - assignments (list of Assignment): placements in the order they were made
    """
    total_time: int
    order: List[Step] = field(default_factory=list)
    assignments: List[Assignment] = field(default_factory=list)


###############################
# Simulation
###############################

def _check_parameters(workers, base_time, idle):
    if workers < 1:
        raise InvalidParameters(f"Worker count must be at least 1, got {workers}.")
    if base_time < 0:
        raise InvalidParameters(f"Base time must be non-negative, got {base_time}.")
    if idle not in IDLE_STRATEGIES:
        raise InvalidParameters(f"Unknown idle strategy '{idle}' (expected one of {', '.join(IDLE_STRATEGIES)}).")


def simulate(graph, workers=DEFAULT_WORKERS, base_time=DEFAULT_BASE_TIME, idle="tick"):
    """
    Run the worker simulation on a copy of `graph`.

    Arguments:
      graph (PrecedenceGraph): steps and their precedence edges
      workers (int): number of identical workers, >= 1
      base_time (int): constant added to every step's duration, >= 0
      idle (str): what an idle worker with nothing to pick up does:
        "tick" advances its clock by 1, "jump" moves it straight to the
        earliest busy worker's clock. Both produce the same timeline.

    Returns:
      ScheduleReport

    Raises InvalidParameters for bad arguments, CycleDetected when steps
    remain that can never become ready.
    """
    _check_parameters(workers, base_time, idle)

    remaining = graph.copy()
    pool = [Worker(i) for i in range(workers)]
    started = set()
    report = ScheduleReport(total_time=0)

    while len(remaining):
        worker = min(pool, key=worker_priority)

        # Retire the job that finishes at this worker's clock
        if worker.busy:
            finished = worker.job
            remaining.remove_node(finished)
            report.order.append(finished)
            worker.job = None
            logger.debug(f"t={worker.clock} worker {worker.index} finished {finished}")

        candidates = remaining.ready() - started
        if candidates:
            step = min(candidates)
            started.add(step)
            worker.job = step
            start = worker.clock
            worker.clock += step.duration(base_time)
            report.assignments.append(Assignment(step, worker.index, start, worker.clock))
            logger.debug(f"t={start} worker {worker.index} started {step} (until t={worker.clock})")
        elif not len(remaining):
            break
        else:
            busy_clocks = [w.clock for w in pool if w.busy]
            if not busy_clocks:
                raise CycleDetected(remaining.nodes())
            # A worker that just retired its job can share its clock with a
            # busy one; it still moves past that instant, exactly as a tick does.
            next_event = min(busy_clocks)
            if idle == "jump" and worker.clock < next_event:
                worker.clock = next_event
            else:
                worker.clock += 1

    # Idle ticks can carry a clock past the final completion
    report.total_time = max((a.end for a in report.assignments), default=0)
    return report


def schedule(graph, workers=DEFAULT_WORKERS, base_time=DEFAULT_BASE_TIME, idle="tick"):
    """Total time for `workers` workers to finish every step of `graph`."""
    return simulate(graph, workers, base_time, idle).total_time
