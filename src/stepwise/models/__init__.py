"""
Models package for Stepwise's workflow core.

This package provides the data shapes the driver works with:
- Steps: validated backend replies and the parser that produces them
- Conversation: the append-only log transmitted to the backend
- ProjectContext: per-run state learned from the replies
- Tool calls: typed per-tool argument contracts
"""

from .conversation import ConversationState, ConversationTurn, TurnRole
from .project_context import ProjectContext
from .step import StepName, StepRecord, parse_step_reply, parse_structure_result
from .tool_call import (
    CreateDynamicFileArgs,
    FileSpec,
    GenerateFileContentArgs,
    GenerateProjectStructureArgs,
    ReadDirectoryArgs,
    ToolCall,
    ToolName,
    is_known_tool,
    parse_tool_call,
)

__all__ = [
    'ConversationState',
    'ConversationTurn',
    'TurnRole',
    'ProjectContext',
    'StepName',
    'StepRecord',
    'parse_step_reply',
    'parse_structure_result',
    'CreateDynamicFileArgs',
    'FileSpec',
    'GenerateFileContentArgs',
    'GenerateProjectStructureArgs',
    'ReadDirectoryArgs',
    'ToolCall',
    'ToolName',
    'is_known_tool',
    'parse_tool_call',
]
