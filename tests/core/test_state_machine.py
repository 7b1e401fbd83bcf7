"""状态机流转单元测试

测试内容：
1. open -> completed 合法
2. 其他流转全部非法
3. 终态不可再流转
"""

import pytest
from taskcoin.core.models.enums import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    TaskStatus,
    validate_transition,
)


class TestStateMachineTransitions:
    """状态机流转验证"""

    def test_open_to_completed_is_valid(self):
        assert validate_transition(TaskStatus.OPEN, TaskStatus.COMPLETED) is True

    @pytest.mark.parametrize(
        "from_status,to_status",
        [
            (TaskStatus.OPEN, TaskStatus.OPEN),
            (TaskStatus.COMPLETED, TaskStatus.OPEN),
            (TaskStatus.COMPLETED, TaskStatus.COMPLETED),
        ],
    )
    def test_invalid_transition(self, from_status: TaskStatus, to_status: TaskStatus):
        """非法流转应被拒绝"""
        assert validate_transition(from_status, to_status) is False

    def test_terminal_states_have_empty_transitions(self):
        for status in TERMINAL_STATES:
            assert VALID_TRANSITIONS[status] == set()

    def test_valid_transitions_completeness(self):
        """VALID_TRANSITIONS 覆盖全部状态"""
        for state in TaskStatus:
            assert state in VALID_TRANSITIONS, f"{state} 未在 VALID_TRANSITIONS 中定义"

    def test_status_values(self):
        assert [s.value for s in TaskStatus] == ["open", "completed"]
