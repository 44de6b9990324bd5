import collections
from time import time

from . import utils

class TimingException(utils.SemhornException):
    """Root exception for the timing module.

    All exceptions thrown by this module should be subclasses of this exception.
    """

class UndefinedMetaAccess(TimingException):
    """Raised upon access of event attribute that has not been set"""

class EventType:
    num_events = 10
    Start, Parsed, Built, Encoded, StartSolver, EndSolver, Sat, Unsat, Unknown, Error = range(num_events)

class Event:
    """Represents a single timed event in the event log.

    When logging an event through log.add, the timestamp attribute is
    automatically set to the current time.
    """

    def __init__(self, timestamp, event_type, **kwargs):
        self.timestamp = timestamp
        self.event_type = event_type
        self.kwargs = kwargs

    def __repr__(self):
        kws = ', '.join(['{} = {}'.format(*i) for i in self.kwargs.items()])
        if kws: kws = ', '+kws
        return 'Event({}, {}{})'.format(self.timestamp, self.event_type, kws)

    def __getattr__(self, name):
        try:
            return self.kwargs[name]
        except KeyError:
            raise UndefinedMetaAccess('Access of undefined event attribute ' + name)


class EventLog:
    """Represents a backlog of timed events."""

    def __init__(self):
        self.events = collections.deque()

    def __call__(self, event_type, **kwargs):
        self.events.append(
            Event(time(), event_type, **kwargs)
        )

    def __iter__(self):
        events = collections.deque(self.events)
        while events:
            assert(events[0].event_type == EventType.Start)
            res = [events.popleft()]
            while events and events[0].event_type != EventType.Start:
                res.append(events.popleft())
            yield res

    def clear(self):
        self.events.clear()

log = EventLog()

_STATUS = {
    EventType.Sat: 'SAT',
    EventType.Unsat: 'UNSAT',
    EventType.Unknown: 'UNKNOWN',
    EventType.Error: 'ERR',
}

_PHASES = [EventType.Parsed, EventType.Built, EventType.Encoded, EventType.EndSolver]

def process_events(f, event_log = log):
    for events in event_log:
        yield f(events)

def _format_time(t):
    return 'n/a' if t is None else '{:8.4f}'.format(t)

def eval_stats(ls):
    """Summarize one run (a start event and its successors) as a table row."""
    assert(ls[0].event_type == EventType.Start)
    start = ls[0]
    status = '?'
    stamps = {}
    for event in ls[1:]:
        if event.event_type in _STATUS:
            status = _STATUS[event.event_type]
        else:
            stamps[event.event_type] = event.timestamp

    durations = []
    prev = start.timestamp
    for phase in _PHASES:
        if phase == EventType.EndSolver and EventType.StartSolver in stamps:
            prev = stamps[EventType.StartSolver]
        if phase in stamps:
            durations.append(stamps[phase] - prev)
            prev = stamps[phase]
        else:
            durations.append(None)

    finished = [stamps[p] for p in _PHASES if p in stamps]
    total = finished[-1] - start.timestamp if finished else None

    return ([start.benchmark, start.engine]
            + [_format_time(d) for d in durations]
            + [_format_time(total), '{:>7}'.format(status)])

def print_solver_stats(event_log = log):
    print(solver_stats(event_log))

def solver_stats(event_log = log):
    stats = list(process_events(eval_stats, event_log))
    headings = ['Benchmark', 'Engine', 'Parse', 'Build', 'Encode', 'Solve', 'Total', 'Status']

    maxlens = [len(h) for h in headings]
    for stat in stats:
        for i,s in enumerate(stat):
            maxlens[i] = max(maxlens[i], len(s))
    field_formats = ['{:'+str(l)+'}' for l in maxlens]
    format_string = ' | '.join(field_formats)

    lines = []
    lines.append(format_string.format(*headings))
    for stat in stats:
        lines.append(format_string.format(*stat))
    return '\n'.join(lines)
