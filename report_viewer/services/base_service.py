"""
服务基类 - 单例、配置读取和线程安全的延迟初始化

请求在线程池中执行，第一次访问可能并发发生。
"""
import threading
from typing import Dict, Type, TypeVar

from report_viewer.core.config import get_settings
from report_viewer.core.logging import get_logger

T = TypeVar('T')

_instances: Dict[type, object] = {}
_instances_lock = threading.Lock()


def singleton(cls: Type[T]) -> Type[T]:
    """单例装饰器 - 每个服务类只创建并初始化一个实例"""

    class SingletonWrapper(cls):  # type: ignore
        def __new__(klass, *args, **kwargs):
            with _instances_lock:
                if klass not in _instances:
                    instance = object.__new__(klass)
                    cls.__init__(instance, *args, **kwargs)
                    _instances[klass] = instance
                return _instances[klass]

        def __init__(self, *args, **kwargs):
            # 已在 __new__ 中完成
            pass

    SingletonWrapper.__name__ = cls.__name__
    SingletonWrapper.__qualname__ = cls.__qualname__
    SingletonWrapper.__module__ = cls.__module__
    SingletonWrapper.__doc__ = cls.__doc__

    return SingletonWrapper  # type: ignore


class BaseService:
    """
    服务基类

    子类在 ``_initialize`` 中打开资源，在 ``_teardown`` 中释放。
    ``_lock`` 是可重入锁，子类可以在同一把锁下访问这些资源，
    这样 ``reload`` 不会在请求进行中关闭它们。
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__module__)
        self.settings = get_settings()
        self._initialized = False
        self._lock = threading.RLock()

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if not self._initialized:
                self._initialize()
                self._initialized = True

    def _initialize(self) -> None:
        """打开资源（子类覆盖）"""

    def _teardown(self) -> None:
        """释放 ``_initialize`` 打开的资源（子类覆盖）"""

    def reload(self) -> None:
        """Release resources and pick up the current environment on next use."""
        with self._lock:
            if self._initialized:
                self._teardown()
                self._initialized = False
            get_settings.cache_clear()
            self.settings = get_settings()

    def __repr__(self):
        return f"<{self.__class__.__name__} initialized={self._initialized}>"
