#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# speech_controller.py

import logging
import math
import os
import signal
import subprocess
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock, Thread, current_thread
from typing import List, Optional, Set, Tuple

from speech_say.commands import SpeechCommand, build_speak_command, build_export_command
from speech_say.completion import Callback, Completion
from speech_say.config import SayConfig
from speech_say.errors import (
    ControllerClosed, MissingFilename, MissingText, NoActiveSpeech, ProcessFailed, ProcessStderr,
    SpawnError, SpeechBusy, UnsupportedPlatform)
from speech_say.platforms import PlatformProfile, LINUX, WIN32, detect_platform, get_profile

logger = logging.getLogger(__name__)

# 进程退出后等待 stderr 读取线程结束的时间(秒)
_STDERR_GRACE = 1.0


class SpeechController:
    """
    调用系统语音命令的控制器

    macOS 使用 say, Linux 使用 festival, Windows 通过 powershell 调用 System.Speech.
    同一时间只跟踪一个语音进程, 所有结果都通过回调和 Future 异步返回.

    示例:
        def on_done(error):
            print("完成" if error is None else f"失败: {error}")

        with SpeechController() as say:
            say.speak("Hello world", voice="Alex", speed=1.5, callback=on_done)
            say.wait_for_all()
    """

    def __init__(self, platform_id: Optional[str] = None, config: Optional[SayConfig] = None):
        self.config = config or SayConfig()
        self.set_platform(platform_id or self.config.platform or detect_platform())

        self._process: Optional[subprocess.Popen] = None
        self._lock = Lock()
        self._watchers: Set[Thread] = set()
        self._closed = False
        self._dispatcher = ThreadPoolExecutor(max_workers=1, thread_name_prefix='speech-say')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def set_platform(self, platform_id: str) -> None:
        """覆盖默认平台, 未知平台抛出 UnsupportedPlatform"""
        self.profile: PlatformProfile = get_profile(platform_id)

    @property
    def platform(self) -> str:
        return self.profile.platform_id

    @property
    def is_speaking(self) -> bool:
        """当前是否有语音进程在运行"""
        with self._lock:
            return self._process is not None and self._process.poll() is None

    def convert_speed(self, speed: float) -> int:
        return math.ceil(self.profile.base_rate * speed)

    def speak(self,
              text: str,
              voice: Optional[str] = None,
              speed: Optional[float] = None,
              callback: Optional[Callback] = None) -> Future:
        """
        通过扬声器朗读文本

        Args:
            text: 待朗读的文本
            voice: 语音名称 (可选)
            speed: 语速倍率, 1.0 为正常, 0.5 减半, 2.0 加倍 (可选)
            callback: 完成回调, 接收 error 参数, 成功时为 None

        Returns:
            Future: 成功时结果为 None, 失败时带有对应异常
        """
        completion = Completion(self._dispatcher, callback)

        if not text:
            completion.resolve(MissingText('speak'))
            return completion.future

        voice, rate = self._voice_and_rate(voice, speed)
        command = build_speak_command(self.profile, text, voice, rate)
        self._launch('speak', command, completion)
        return completion.future

    def export_to_file(self,
                       text: str,
                       voice: Optional[str] = None,
                       speed: Optional[float] = None,
                       filename: Optional[str] = None,
                       callback: Optional[Callback] = None) -> Future:
        """
        将语音保存为音频文件 (仅 macOS)

        Args:
            text: 待朗读的文本
            voice: 语音名称 (可选)
            speed: 语速倍率 (可选)
            filename: 输出文件路径, 例如 "greeting.wav"
            callback: 完成回调, 接收 error 参数

        Returns:
            Future: 与 speak() 相同
        """
        completion = Completion(self._dispatcher, callback)

        if not text:
            completion.resolve(MissingText('export_to_file'))
            return completion.future

        if not filename:
            completion.resolve(MissingFilename('export_to_file'))
            return completion.future

        voice, rate = self._voice_and_rate(voice, speed)
        try:
            command = build_export_command(self.profile, text, str(filename), voice, rate,
                                           self.config.export_data_format)
        except UnsupportedPlatform as e:
            completion.resolve(e)
            return completion.future

        self._launch('export_to_file', command, completion)
        return completion.future

    def stop(self, callback: Optional[Callback] = None) -> Future:
        """
        停止当前语音

        终止请求发出后立即返回成功, 不确认进程是否真的被结束.
        """
        completion = Completion(self._dispatcher, callback)

        with self._lock:
            process = self._process
            self._process = None

        if process is None:
            completion.resolve(NoActiveSpeech())
            return completion.future

        logger.info(f"Stopping speech [pid: {process.pid}]")
        try:
            self._terminate(process)
        except ProcessLookupError:
            logger.warning(f"Speech process {process.pid} already exited")
        except OSError as e:
            logger.error(f"Failed to stop speech process {process.pid}: {e}")

        completion.resolve(None)
        return completion.future

    def wait_for_all(self, timeout: Optional[float] = None) -> None:
        """等待所有语音进程结束并完成回调分发"""
        with self._lock:
            watchers = list(self._watchers)
        for watcher in watchers:
            watcher.join(timeout=timeout)

    def close(self) -> None:
        """
        等待监视线程并关闭回调线程

        关闭后不再启动新的语音; 超时后仍在运行的进程照常结束,
        其结果改由独立线程投递.
        """
        with self._lock:
            self._closed = True
        self.wait_for_all(timeout=self.config.stop_timeout)
        self._dispatcher.shutdown(wait=True)

    def _voice_and_rate(self, voice: Optional[str], speed: Optional[float]) -> Tuple[Optional[str], Optional[int]]:
        voice = voice or self.config.voice
        speed = speed or self.config.speed
        rate = self.convert_speed(speed) if speed else None
        return voice, rate

    def _launch(self, operation: str, command: SpeechCommand, completion: Completion) -> None:
        """启动子进程并开始监听 stderr 和退出事件"""
        with self._lock:
            if self._closed:
                completion.resolve(ControllerClosed(operation))
                return

            if self._process is not None:
                completion.resolve(SpeechBusy(operation, self._process.pid))
                return

            try:
                process = subprocess.Popen(
                    command.argv,
                    stdin=subprocess.PIPE,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.PIPE,
                    encoding=self.config.encoding,
                    errors='replace',
                    # festival 经由 sh 启动 aplay, 独立进程组便于整组终止
                    start_new_session=self.platform == LINUX,
                )
            except OSError as e:
                logger.error(f"{operation}(): failed to start {command.command}: {e}")
                completion.resolve(SpawnError(command.command, e))
                return

            self._process = process

        logger.info(f"{operation}(): started {command.command} [pid: {process.pid}]")

        if command.piped_data:
            try:
                process.stdin.write(command.piped_data)
                process.stdin.close()
            except (OSError, ValueError) as e:
                # 进程已退出, 结果由退出事件报告
                logger.warning(f"{operation}(): could not write to {command.command}: {e}")

        captured: List[str] = []
        stderr_reader = Thread(target=self._read_stderr,
                               args=(process, completion, captured), daemon=True)
        watcher = Thread(target=self._watch,
                         args=(operation, process, completion, stderr_reader, captured), daemon=True)

        with self._lock:
            self._watchers.add(watcher)
        stderr_reader.start()
        watcher.start()

    def _read_stderr(self, process: subprocess.Popen, completion: Completion, captured: List[str]) -> None:
        first = process.stderr.readline()
        if not first:
            return

        captured.append(first)
        if self.config.strict_stderr:
            completion.resolve(ProcessStderr(first))

        rest = process.stderr.read()
        if rest:
            captured.append(rest)

    def _watch(self,
               operation: str,
               process: subprocess.Popen,
               completion: Completion,
               stderr_reader: Thread,
               captured: List[str]) -> None:
        try:
            returncode = process.wait()
            stderr_reader.join(timeout=_STDERR_GRACE)

            with self._lock:
                if self._process is process:
                    self._process = None

            self._close_streams(process, close_stderr=not stderr_reader.is_alive())

            if completion.resolved:
                logger.debug(f"{operation}(): result already delivered [pid: {process.pid}]")
                return

            if returncode == 0:
                logger.info(f"{operation}(): finished [pid: {process.pid}]")
                completion.resolve(None)
                return

            code, sig = (None, -returncode) if returncode < 0 else (returncode, None)
            logger.warning(f"{operation}(): exited [code: {code}] [signal: {sig}]")
            completion.resolve(ProcessFailed(operation, code, sig, ''.join(captured)))
        finally:
            with self._lock:
                self._watchers.discard(current_thread())

    def _terminate(self, process: subprocess.Popen) -> None:
        if self.platform == LINUX:
            # 终止整个进程组, 包括真正播放音频的 aplay
            os.killpg(os.getpgid(process.pid), signal.SIGTERM)
        elif self.platform == WIN32:
            self._pause_stdin(process)
            subprocess.Popen(['taskkill', '/pid', str(process.pid), '/T', '/F'],
                             stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        else:
            self._pause_stdin(process)
            process.terminate()

    @staticmethod
    def _pause_stdin(process: subprocess.Popen) -> None:
        if process.stdin and not process.stdin.closed:
            try:
                process.stdin.close()
            except OSError as e:
                logger.debug(f"Ignoring stdin close error: {e}")

    @staticmethod
    def _close_streams(process: subprocess.Popen, close_stderr: bool) -> None:
        SpeechController._pause_stdin(process)
        if close_stderr and process.stderr:
            process.stderr.close()
