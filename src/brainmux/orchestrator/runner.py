"""Brain 并行执行器

以有限并发运行调用方提供的 Brain 协程，并在总超时到达时返回已完成的部分结果。
Brain 的内部逻辑不在本模块范围内。
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence

from loguru import logger

from brainmux.aggregator.models import BrainOutput
from brainmux.core.config import BrainMuxSettings, get_settings
from brainmux.orchestrator.context import BrainContext

BrainCallable = Callable[[BrainContext], Awaitable[BrainOutput]]
"""Brain 实现：接收上下文，返回一个 BrainOutput"""


class BrainRunner:
    """Brain 并行执行器

    特点：
    - Semaphore 限制并发数
    - 总超时后取消未完成的 Brain，返回已完成的结果（可能为空）
    - 单个 Brain 失败只记录日志，不影响其他 Brain
    - 在边界处统一质量刻度（0-100 → 0-1）
    """

    def __init__(
        self,
        brains: Mapping[str, BrainCallable],
        max_concurrent: int | None = None,
        timeout: float | None = None,
        settings: BrainMuxSettings | None = None,
    ):
        """初始化执行器

        Args:
            brains: Brain 标识到实现的映射
            max_concurrent: 最大并发数（默认取配置）
            timeout: 一轮执行的总超时（秒，默认取配置）
            settings: 配置
        """
        settings = settings or get_settings()
        self.brains = dict(brains)
        self.max_concurrent = max_concurrent or settings.max_concurrent_brains
        self.timeout = timeout if timeout is not None else settings.execution_timeout_seconds

    async def run(
        self,
        brain_ids: Sequence[str],
        context: BrainContext,
    ) -> list[BrainOutput]:
        """执行选中的 Brain

        Args:
            brain_ids: 要执行的 Brain（按执行顺序）
            context: 执行上下文

        Returns:
            成功完成的输出（按请求顺序）；顺序与数量不保证与请求一致
        """
        runnable = []
        for brain_id in brain_ids:
            if brain_id in self.brains:
                runnable.append(brain_id)
            else:
                logger.warning(f"未注册实现的 Brain，跳过: {brain_id}")

        if not runnable:
            return []

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def run_one(brain_id: str) -> BrainOutput:
            async with semaphore:
                start = asyncio.get_running_loop().time()
                output = await self.brains[brain_id](context)
                duration_ms = (asyncio.get_running_loop().time() - start) * 1000
                logger.debug(f"Brain {brain_id} 完成 ({duration_ms:.0f}ms)")
                return BrainOutput.from_raw(output.source, output.content, output.quality)

        tasks = {
            brain_id: asyncio.create_task(run_one(brain_id), name=f"brain-{brain_id}")
            for brain_id in runnable
        }
        done, pending = await asyncio.wait(tasks.values(), timeout=self.timeout)

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.warning(
                f"{len(pending)} 个 Brain 超过 {self.timeout:.1f}s 未完成，已取消"
            )

        outputs = []
        for brain_id, task in tasks.items():
            if task not in done:
                continue
            if task.cancelled():
                logger.warning(f"Brain {brain_id} 被取消，跳过")
                continue
            error = task.exception()
            if error is not None:
                logger.error(f"Brain {brain_id} 执行失败: {error}")
                continue
            outputs.append(task.result())

        logger.info(f"BrainRunner: 请求 {len(brain_ids)} 个, 完成 {len(outputs)} 个")
        return outputs
