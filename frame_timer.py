import time

TIMER_SLOTS = 30


class FrameTimer:
    """
    Rolling frame timer over the last TIMER_SLOTS frames.

    Durations are whole milliseconds kept in a ring buffer together with
    their running sum. The clock must return integer nanoseconds.
    average() always divides by the full slot count, so the first lap
    after startup reads low until every slot has been written.
    """

    def __init__(self, slots=TIMER_SLOTS, clock=time.perf_counter_ns):
        self.clock = clock
        self.timings = [0] * slots
        self.sum = 0
        self.index = 0
        self.instant = clock()

    def start_frame(self):
        self.instant = self.clock()

    def end_frame(self):
        elapsed = (self.clock() - self.instant) // 1_000_000
        last_val = self.timings[self.index]
        self.timings[self.index] = elapsed

        # sum must track the slot contents exactly
        self.sum -= last_val
        self.sum += elapsed
        self.index = (self.index + 1) % len(self.timings)

    def average(self):
        return self.sum // len(self.timings)


def format_timing(avg_ms):
    if avg_ms == 0:
        return f"{avg_ms} ms or inf fps"
    return f"{avg_ms} ms or {1000 // avg_ms} fps"
