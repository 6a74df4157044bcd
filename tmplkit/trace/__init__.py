from .trace_emitter import RENDER_FAILED, RENDER_FINISHED, RENDER_STARTED, TraceEmitter
from .trace_store_jsonl import TraceStoreJSONL

__all__ = ["RENDER_FAILED", "RENDER_FINISHED", "RENDER_STARTED", "TraceEmitter", "TraceStoreJSONL"]
