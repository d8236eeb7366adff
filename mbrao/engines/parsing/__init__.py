from mbrao.engines.parsing.plain_text import PlainTextEngine

__all__ = ["PlainTextEngine"]
