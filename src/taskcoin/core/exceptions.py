"""TaskCoin Core 异常体系

所有业务失败都以结构化异常抛给调用方，code 为稳定的错误码，
由网关层统一渲染为错误响应。核心层不做任何自动重试。
"""

from decimal import Decimal


class TaskCoinError(Exception):
    """Core 包基础异常"""

    code: str = "TASKCOIN_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------- NotFound ----------


class NotFoundError(TaskCoinError):
    """引用的用户或任务不存在"""

    code = "NOT_FOUND"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: int) -> None:
        super().__init__("User not found")
        self.user_id = user_id


class TaskNotFoundError(NotFoundError):
    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: int) -> None:
        super().__init__("Task not found")
        self.task_id = task_id


class ExecutorNotFoundError(NotFoundError):
    code = "EXECUTOR_NOT_FOUND"

    def __init__(self, user_id: int) -> None:
        super().__init__("Executor user not found")
        self.user_id = user_id


# ---------- InvalidState ----------


class InvalidStateError(TaskCoinError):
    """任务当前状态不允许该操作"""

    code = "INVALID_STATE"


class TaskAlreadyCompletedError(InvalidStateError):
    code = "TASK_ALREADY_COMPLETED"

    def __init__(self, task_id: int) -> None:
        super().__init__("Task already completed")
        self.task_id = task_id


# ---------- Forbidden ----------


class ForbiddenError(TaskCoinError):
    code = "FORBIDDEN"


class SelfCompletionError(ForbiddenError):
    """创建者不能完成自己发布的任务"""

    code = "CANNOT_COMPLETE_OWN_TASK"

    def __init__(self, task_id: int) -> None:
        super().__init__("You cannot complete your own task")
        self.task_id = task_id


# ---------- InsufficientFunds ----------


class InsufficientFundsError(TaskCoinError):
    code = "INSUFFICIENT_BALANCE"

    def __init__(self, balance: Decimal, required: Decimal) -> None:
        super().__init__("Insufficient coin balance")
        self.balance = balance
        self.required = required


# ---------- Conflict ----------


class ConflictError(TaskCoinError):
    code = "CONFLICT"


class UsernameExistsError(ConflictError):
    code = "USERNAME_EXISTS"

    def __init__(self, username: str) -> None:
        super().__init__("Username already exists")
        self.username = username


# ---------- 输入 / 鉴权 ----------


class InvalidRewardError(TaskCoinError):
    """悬赏金额非正数或精度超过两位小数"""

    code = "INVALID_REWARD"


class AuthenticationError(TaskCoinError):
    """用户名或密码错误、令牌无效

    登录失败时不区分具体原因，避免用户名枚举。
    """

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)
