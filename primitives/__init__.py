""" Building blocks used by `core`: request modifiers, body decoding and tracing. """
from primitives.modifiers import RequestModifier, BearerAuth, TokenAuthenticator, Environment, DateFormat, \
    ContentType, DEFAULT_DATE_FORMAT, DEFAULT_CONTENT_TYPE
from primitives.decoding import decode_body, decode_json, is_error_status
from primitives.tracing import Tracer, DebugTracer, TraceTracer, get_tracer
