"""Keyword and reply tables for the local fallback responder.

Every table is keyed by language (``zh`` or ``en``). Chinese entries are the
product's primary phrasing; English entries cover the same intents. Matching
is substring-based over the lowercased message, so English phrases are
stored lowercase.

Tables are immutable tuples; the responder never mutates them.
"""
from __future__ import annotations

from typing import Dict, Tuple

Language = str

# Checked before panic phrases.
SELF_HARM_PHRASES: Dict[Language, Tuple[str, ...]] = {
    "zh": ("不想活了", "想结束", "想死", "自杀", "自残"),
    "en": (
        "don't want to live",
        "dont want to live",
        "want to die",
        "end it all",
        "kill myself",
        "suicide",
        "hurt myself",
        "self-harm",
    ),
}

PANIC_PHRASES: Dict[Language, Tuple[str, ...]] = {
    "zh": ("喘不上气", "手在抖", "心跳好快", "要疯了", "崩溃", "惊恐"),
    "en": (
        "can't breathe",
        "cant breathe",
        "hands are shaking",
        "heart is racing",
        "going crazy",
        "panic attack",
        "breaking down",
    ),
}

SELF_HARM_SCRIPTS: Dict[Language, Tuple[str, ...]] = {
    "zh": (
        "我听到了你的痛苦，这一刻一定很难熬🌙\n\n但请记住，你不是一个人。如果需要专业帮助，可以拨打心理援助热线：400-161-9995",
        "我能感受到你现在的痛苦，请给自己一个机会💙\n\n专业帮助可以拨打心理援助热线：400-161-9995，有人愿意支持你",
        "这种时候真的很难熬，我理解你的感受🫂\n\n但请相信，还有人在乎你。心理援助热线：400-161-9995",
    ),
    "en": (
        "I hear how much pain you're in, and this moment must be really hard 🌙\n\n"
        "Please remember you are not alone. If you need professional support, call the helpline: 400-161-9995",
        "I can feel how much you're hurting right now. Please give yourself a chance 💙\n\n"
        "Professional help is available at the helpline 400-161-9995, and people there want to support you",
        "Moments like this are really hard, and I understand how you feel 🫂\n\n"
        "Please believe that people still care about you. Helpline: 400-161-9995",
    ),
}

PANIC_SCRIPTS: Dict[Language, Tuple[str, ...]] = {
    "zh": (
        "深呼吸，我就在这里陪着你🫂\n\n先花60秒让心跳慢下来，好吗？点击右下角的SOS按钮",
        "我在这里，感受到你的惊恐了💙\n\n我们先做60秒急救练习，点击右下角SOS按钮，我会陪你慢慢来",
        "别怕，我陪着你✨ 感觉很可怕对吧？我们先从60秒呼吸练习开始，点击SOS按钮",
    ),
    "en": (
        "Breathe deeply, I'm right here with you 🫂\n\n"
        "Let's take 60 seconds to slow your heartbeat, okay? Tap the SOS button in the bottom right corner",
        "I'm here, and I can feel your panic 💙\n\n"
        "Let's do the 60-second first-aid exercise together. Tap the SOS button and we'll go slowly",
        "Don't be afraid, I'm with you ✨ It feels scary, right? "
        "Let's start with a 60-second breathing exercise. Tap the SOS button",
    ),
}

# Ordered: the first group with a matching keyword wins.
REPLY_GROUPS: Tuple[Tuple[str, Dict[Language, Tuple[str, ...]], Dict[Language, Tuple[str, ...]]], ...] = (
    (
        "work_criticism",
        {
            "zh": ("被骂", "批评", "老板", "领导"),
            "en": ("criticized", "criticised", "scolded", "yelled at", "my boss", "manager"),
        },
        {
            "zh": (
                "抱抱，被批评的感觉真的很不好受😢 这种情况确实很委屈",
                "哎，被当面批评谁都会难过的，很正常你会有这种反应",
                "我能理解你的感受，换做是我也会觉得委屈",
                "这种场合被批评，真的很考验心理素质呢",
            ),
            "en": (
                "Hugs, being criticized really doesn't feel good 😢 It's completely understandable to feel wronged",
                "Anyone would feel hurt being criticized like that. Your reaction is very normal",
                "I understand how you feel. I'd feel wronged in your place too",
                "Being criticized in that kind of situation really tests your resilience",
            ),
        },
    ),
    (
        "anxiety",
        {
            "zh": ("焦虑", "紧张", "担心", "害怕"),
            "en": ("anxious", "anxiety", "nervous", "worried", "scared", "afraid"),
        },
        {
            "zh": (
                "感受到了，焦虑真的很难受💭 这种感觉是从什么时候开始的？",
                "嗯，焦虑就像心里的警报器一直在响，很累人吧",
                "我理解，那种紧张感确实很消耗精力",
                "听起来你现在压力不小呢，想聊聊具体是什么让你焦虑吗？",
            ),
            "en": (
                "I can feel it, anxiety is really uncomfortable 💭 When did this feeling start?",
                "Anxiety is like an alarm that keeps ringing inside. That must be exhausting",
                "I understand, that kind of tension really drains your energy",
                "It sounds like you're under a lot of pressure. Want to talk about what's making you anxious?",
            ),
        },
    ),
    (
        "exhaustion",
        {
            "zh": ("累", "疲惫", "撑不住", "坚持不下去"),
            "en": ("tired", "exhausted", "worn out", "can't keep going", "cant keep going"),
        },
        {
            "zh": (
                "你已经很努力了，真的。🌿\n\n疲惫是身体在告诉我们需要休息。现在最想做的是什么？",
                "你已经很努力了，真的🌱 累了就歇会儿吧",
                "嗯，感觉身体在提醒你需要休息了呢",
                "抱抱，这种疲惫感我懂的，不要太勉强自己",
                "听起来你真的需要好好休息一下了",
            ),
            "en": (
                "You've already worked so hard, truly. 🌿\n\n"
                "Tiredness is your body telling you it needs rest. What would you most like to do right now?",
                "You've tried so hard 🌱 It's okay to rest when you're tired",
                "It sounds like your body is reminding you that you need a break",
                "Hugs, I know this kind of exhaustion. Don't push yourself too hard",
            ),
        },
    ),
    (
        "grief",
        {
            "zh": ("委屈", "难过", "想哭", "伤心"),
            "en": ("sad", "upset", "want to cry", "heartbroken", "hurt"),
        },
        {
            "zh": (
                "委屈的感觉我懂，这一刻你不需要坚强。💙\n\n眼泪也是情绪的出口…发生什么事了？",
                "委屈的感觉真的很难熬😢 想哭就哭出来吧",
                "我懂，这种时候确实很不好受，你不需要假装坚强",
                "抱抱你🫂 这种时刻有人理解你的感受吗？",
                "听起来真的很难过，发生什么事了？",
            ),
            "en": (
                "I understand that feeling of being wronged. You don't have to be strong right now. 💙\n\n"
                "Tears are a way to let feelings out... What happened?",
                "It's okay to cry if you need to 😢",
                "Hugs 🫂 Is there anyone around who understands how you feel?",
                "That sounds really painful. What happened?",
            ),
        },
    ),
    (
        "anger",
        {
            "zh": ("愤怒", "生气", "火大", "气死了"),
            "en": ("angry", "furious", "mad at", "pissed"),
        },
        {
            "zh": (
                "愤怒是正常的情绪反应，让我们先平复一下。🌙\n\n是什么让你这么生气？",
                "嗯，愤怒确实很难控制，到底是什么让你这么生气？",
                "我理解，有些事确实很让人火大呢",
                "这种愤怒是正常的，想说说看发生了什么吗？",
                "感受到你的怒气了，这种情况下谁都会生气的",
            ),
            "en": (
                "Anger is a normal reaction. Let's take a moment to settle first. 🌙\n\nWhat made you so angry?",
                "I get it, some things are really infuriating",
                "That anger is normal. Do you want to tell me what happened?",
                "I can feel your frustration. Anyone would be angry in that situation",
            ),
        },
    ),
    (
        "overload",
        {
            "zh": ("压力", "压抑", "喘不过气"),
            "en": ("stressed", "pressure", "overwhelmed", "suffocating"),
        },
        {
            "zh": (
                "感觉被压垮了对吧，我们一步步来缓解。🫂\n\n现在最让你有压力的是什么？",
                "嗯，感觉被压得很重对吧？我们能慢慢聊聊",
                "我理解，那种压力确实很让人窒息",
                "听起来你现在承受了很多，想分享一下吗？",
                "抱抱，这种压抑感真的很难熬🫂",
            ),
            "en": (
                "It feels like you're being crushed, doesn't it? Let's ease it step by step. 🫂\n\n"
                "What's putting the most pressure on you right now?",
                "It sounds like you're carrying a lot right now. Want to share?",
                "I understand, that kind of pressure can be suffocating",
            ),
        },
    ),
)

GENERIC_REPLIES: Dict[Language, Tuple[str, ...]] = {
    "zh": (
        "我听到了你的感受。这听起来确实不容易。🌙\n\n能告诉我更多吗？",
        "谢谢你愿意和我分享这些。🫂\n\n你现在感觉怎么样？",
        "这种感觉一定很不好受。我在这里陪着你。🌿\n\n想聊聊是什么让你有这样的感受吗？",
        "我能感受到你的情绪。在这个安全的空间里，你可以慢慢说。💙\n\n没有对错，只有你真实的感受。",
    ),
    "en": (
        "I hear what you're feeling. That sounds really hard. 🌙\n\nCan you tell me more?",
        "Thank you for sharing this with me. 🫂\n\nHow are you feeling right now?",
        "That must feel really uncomfortable. I'm here with you. 🌿\n\nWould you like to talk about what's behind it?",
        "I can sense your emotions. This is a safe space, take your time. 💙\n\n"
        "There's no right or wrong, only how you truly feel.",
    ),
}

EMOTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "anxiety": ("焦虑", "紧张", "担心", "害怕", "不安", "恐慌", "anxious", "nervous", "worried", "scared"),
    "anger": ("愤怒", "生气", "火大", "气死了", "烦躁", "angry", "furious", "irritated"),
    "sadness": ("难过", "伤心", "想哭", "委屈", "失落", "sad", "upset", "lonely"),
    "exhaustion": ("累", "疲惫", "撑不住", "坚持不下去", "耗尽", "tired", "exhausted", "drained"),
    "stress": ("压力", "压抑", "喘不过气", "承受不住", "stressed", "pressure", "overwhelmed"),
}

__all__ = [
    "Language",
    "SELF_HARM_PHRASES",
    "PANIC_PHRASES",
    "SELF_HARM_SCRIPTS",
    "PANIC_SCRIPTS",
    "REPLY_GROUPS",
    "GENERIC_REPLIES",
    "EMOTION_KEYWORDS",
]
