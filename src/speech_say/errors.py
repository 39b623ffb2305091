#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# errors.py

from typing import Optional


class SayError(Exception):
    """语音命令错误的基类"""


class UnsupportedPlatform(SayError):
    """平台不受支持 (构造时抛出, 或操作在当前平台不可用)"""

    def __init__(self, platform_id: str, operation: Optional[str] = None):
        self.platform_id = platform_id
        self.operation = operation
        if operation:
            message = f"{operation}(): does not support platform {platform_id}"
        else:
            message = f"unsupported platform: {platform_id}"
        super().__init__(message)


class MissingText(SayError, ValueError):
    """缺少待朗读的文本"""

    def __init__(self, operation: str):
        super().__init__(f"{operation}(): must provide text parameter")


class MissingFilename(SayError, ValueError):
    """缺少导出文件名"""

    def __init__(self, operation: str):
        super().__init__(f"{operation}(): must provide filename parameter")


class ProcessStderr(SayError):
    """子进程向错误流写入了内容"""

    def __init__(self, stderr: str):
        self.stderr = stderr
        super().__init__(stderr.strip())


class ProcessFailed(SayError):
    """子进程以非零退出码结束或被信号终止"""

    def __init__(self, operation: str, code: Optional[int], signal: Optional[int], stderr: str = ""):
        self.code = code
        self.signal = signal
        self.stderr = stderr
        super().__init__(
            f"{operation}(): could not talk, had an error [code: {code}] [signal: {signal}]")


class NoActiveSpeech(SayError):
    """没有正在进行的语音"""

    def __init__(self):
        super().__init__("stop(): no speech to kill")


class SpeechBusy(SayError):
    """已有语音进程在运行"""

    def __init__(self, operation: str, pid: int):
        self.pid = pid
        super().__init__(f"{operation}(): speech already in progress [pid: {pid}]")


class SpawnError(SayError):
    """无法启动语音命令"""

    def __init__(self, command: str, cause: OSError):
        self.command = command
        self.cause = cause
        super().__init__(f"could not start {command}: {cause}")


class ControllerClosed(SayError):
    """控制器已关闭, 不再启动新的语音"""

    def __init__(self, operation: str):
        super().__init__(f"{operation}(): controller is closed")
