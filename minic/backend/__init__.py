"""
MiniC Backend Package.

Contains the result extractor (textual pattern matching over IR) and the
native LLVM backend.

Author: xwest
"""

from .result_extractor import ResultExtractor, ExtractionResult, ReturnTracer, extract
from .llvm_backend import LLVMBackend, create_backend
from .errors import BackendError

__all__ = [
    'ResultExtractor', 'ExtractionResult', 'ReturnTracer', 'extract',
    'LLVMBackend', 'create_backend',
    'BackendError',
]
