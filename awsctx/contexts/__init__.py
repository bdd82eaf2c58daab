"""
Context switching on top of the credentials store.
"""

from .service import Context, ContextService
from .picker import fzf_select
