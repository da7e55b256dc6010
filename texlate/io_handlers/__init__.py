"""I/O handlers for texlate."""
from .output_writer import OutputPaths, output_paths, write_outputs
from .renderer_runner import RendererRunner, RenderResult, texinputs_for
from .error_handler import ErrorType, ErrorResult, WriteFailureHandler

__all__ = [
    'OutputPaths', 'output_paths', 'write_outputs',
    'RendererRunner', 'RenderResult', 'texinputs_for',
    'ErrorType', 'ErrorResult', 'WriteFailureHandler',
]
