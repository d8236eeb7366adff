from mbrao.engines.rendering.html_pipeline import HtmlPipelineEngine

__all__ = ["HtmlPipelineEngine"]
