# zhixue_core/topic_catalog.py

from typing import Dict, List, Optional

from .schema import Subject, TopicDefinition


# ============================
# Knowledge points per subject
# ============================
# List order is the coverage order of the diagnostic quiz and of the report.

SUBJECT_TOPICS: Dict[Subject, List[TopicDefinition]] = {
    Subject.MATH: [
        TopicDefinition("代数基础", "熟练掌握整式加减乘除、幂的运算及因式分解"),
        TopicDefinition("平面几何", "掌握全等、相似三角形判定及特殊四边形性质与证明"),
        TopicDefinition("函数图像", "理解一次函数、二次函数性质并能解决实际应用问题"),
        TopicDefinition("数据统计", "能计算平均数、方差，理解数据的离散程度与统计意义"),
        TopicDefinition("逻辑推理", "掌握基础证明方法，严谨表述数学推理过程"),
    ],
    Subject.ENGLISH: [
        TopicDefinition("词汇量", "掌握课标要求的核心词汇拼写及在语境中的准确运用"),
        TopicDefinition("语法时态", "准确运用一般过去时、现在完成时等基本时态及被动语态"),
        TopicDefinition("阅读理解", "能理解主旨大意，推断隐含意义及分析文章结构"),
        TopicDefinition("写作表达", "能运用丰富句式清晰、连贯地表达观点与叙事"),
        TopicDefinition("听力理解", "能听懂日常对话关键信息及长对话细节含义"),
    ],
    Subject.CHINESE: [
        TopicDefinition("古诗文默写", "准确背诵并默写课标推荐的古诗文篇目，不写错别字"),
        TopicDefinition("文言文阅读", "理解常见实词虚词含义，能翻译浅易文言文"),
        TopicDefinition("现代文阅读", "概括文章中心，赏析语言特色及表现手法"),
        TopicDefinition("作文", "能够写出中心明确、结构完整、语言通顺的记叙文或议论文"),
        TopicDefinition("基础知识", "掌握字音字形、成语运用及病句修改"),
    ],
    Subject.PHYSICS: [
        TopicDefinition("力学", "掌握牛顿运动定律，能分析受力情况及简单机械原理"),
        TopicDefinition("光学", "理解光的反射、折射规律及透镜成像原理"),
        TopicDefinition("电学", "掌握欧姆定律，能进行串并联电路分析及电功率计算"),
        TopicDefinition("声学", "了解声音产生传播条件及乐音三要素"),
        TopicDefinition("热学", "理解物态变化吸放热及比热容概念"),
    ],
    Subject.CHEMISTRY: [
        TopicDefinition("物质构成", "理解分子、原子、离子概念及原子的核外电子排布"),
        TopicDefinition("化学方程式", "正确书写化学方程式并进行基于质量守恒的计算"),
        TopicDefinition("酸碱盐", "掌握常见酸碱盐的化学性质及复分解反应条件"),
        TopicDefinition("实验操作", "掌握基本实验操作规范及气体制备收集方法"),
        TopicDefinition("金属", "了解金属物理性质、化学性质及金属活动性顺序"),
    ],
}


def topics_for(subject: Subject) -> List[TopicDefinition]:
    return list(SUBJECT_TOPICS[subject])


def topic_names(subject: Subject) -> List[str]:
    return [t.name for t in SUBJECT_TOPICS[subject]]


def find_topic(subject: Subject, name: str) -> Optional[TopicDefinition]:
    for topic in SUBJECT_TOPICS[subject]:
        if topic.name == name:
            return topic
    return None


def is_known_topic(subject: Subject, name: Optional[str]) -> bool:
    return name is not None and find_topic(subject, name) is not None

