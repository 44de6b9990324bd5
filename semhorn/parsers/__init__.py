from .eventparser import parse, parse_file, parse_array, parse_events, parse_event, parse_terms, parse_term_array
from .jsonutils import DeserializationException
