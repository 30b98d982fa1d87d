"""内置 Brain 参考数据

未配置注册表文件时使用。
"""

from brainmux.registry.models import BrainProfile

# ==================== 核心 Brain ====================

CONDUCTOR = BrainProfile(
    brain_id="conductorAdvisor",
    description=(
        "The unified master planner. Creates ONE master plan that guides all "
        "downstream brains."
    ),
    order=0,
    complexity=10,
    latency_ms=10,
)
"""Planner：规划"""

TOOL_CALL = BrainProfile(
    brain_id="toolCallAdvisor",
    description=(
        "Plan-aware tool executor. Reads the master plan and only executes tools "
        "if they are required."
    ),
    order=2,
    complexity=10,
    latency_ms=15,
)
"""Hands：执行工具"""

SELF_REFINE = BrainProfile(
    brain_id="selfRefineV3Advisor",
    description=(
        "Evaluates responses against multiple criteria, judges quality and "
        "appropriateness, triggers refinement if needed, enforces quality standards"
    ),
    order=1000,
    complexity=10,
    latency_ms=100,
)
"""Judge：质量评审（最后执行）"""

PERSONALITY = BrainProfile(
    brain_id="personalityAdvisor",
    description=(
        "Applies consistent personality traits, maintains character consistency "
        "across conversations, expresses values and principles"
    ),
    order=800,
    complexity=5,
    latency_ms=50,
)
"""Voice：语气与人格"""

DEFAULT_CORE_BRAINS: tuple[str, ...] = (
    CONDUCTOR.brain_id,
    TOOL_CALL.brain_id,
    SELF_REFINE.brain_id,
    PERSONALITY.brain_id,
)

# ==================== 专家 Brain ====================

SPECIALIST_BRAINS: list[BrainProfile] = [
    BrainProfile(
        brain_id="errorPredictionAdvisor",
        description=(
            "Predicts potential errors and edge cases, detects security concerns "
            "and performance issues, validates reasoning before execution"
        ),
        complexity=8,
        latency_ms=80,
    ),
    BrainProfile(
        brain_id="knowledgeGraphAdvisor",
        description=(
            "Builds and queries knowledge graph, connects concepts and "
            "relationships, enables semantic reasoning and context enrichment"
        ),
        complexity=9,
        latency_ms=150,
    ),
    BrainProfile(
        brain_id="advancedCapabilitiesAdvisor",
        description=(
            "Handles complex reasoning and multi-step problem solving, simulates "
            "multiple scenarios, evaluates and selects best responses"
        ),
        complexity=8,
        latency_ms=120,
    ),
    BrainProfile(
        brain_id="theoryOfMindAdvisor",
        description=(
            "Infers user mental state and knowledge level, detects confusion and "
            "expertise areas, predicts user needs and learning style"
        ),
        complexity=7,
    ),
    BrainProfile(
        brain_id="conversationMemoryAdvisor",
        description=(
            "Maintains conversation history and context, recalls previous "
            "interactions and decisions to provide continuity"
        ),
    ),
    BrainProfile(
        brain_id="emotionalContextAdvisor",
        description=(
            "Analyzes user emotions and sentiment, detects emotional state and "
            "prepares emotional context for response adaptation"
        ),
    ),
    BrainProfile(
        brain_id="responseSummarizerAdvisor",
        description=(
            "Summarizes and condenses responses, extracts key information, "
            "formats output for clarity and readability"
        ),
    ),
    BrainProfile(
        brain_id="safetyGuardrailAdvisor",
        description=(
            "Safety guardrail that prevents dangerous tool execution without "
            "explicit approval. Checks permissions and enforces safety policies."
        ),
    ),
    BrainProfile(
        brain_id="learningGrowthAdvisor",
        description=(
            "Learns from interactions and improves over time, adapts to user "
            "preferences and patterns, evolves strategies based on feedback"
        ),
    ),
]

DEFAULT_BRAINS: list[BrainProfile] = [
    CONDUCTOR,
    TOOL_CALL,
    SELF_REFINE,
    PERSONALITY,
    *SPECIALIST_BRAINS,
]
