"""Scratch 2 block categories and the block selector lookup table."""

from enum import Enum
from typing import Dict, Optional


class BlockCategory(Enum):
    """Palette category of a Scratch 2 block."""
    CONTROL = "control"
    DATA = "data"
    EVENTS = "events"
    LOOKS = "looks"
    MORE_BLOCKS = "more-blocks"
    MOTION = "motion"
    OPERATORS = "operators"
    PEN = "pen"
    SENSING = "sensing"
    SOUND = "sound"

    @classmethod
    def parse(cls, label: str) -> Optional["BlockCategory"]:
        """Return the category for a label such as "motion" or "more blocks"."""
        normalized = label.strip().lower().replace(" ", "-")
        for category in cls:
            if category.value == normalized:
                return category
        return None


# Block selectors as they appear in Scratch 2 project.json scripts,
# grouped by palette.
_SELECTORS_BY_CATEGORY: Dict[BlockCategory, tuple] = {
    BlockCategory.MOTION: (
        "forward:",
        "turnRight:",
        "turnLeft:",
        "heading:",
        "pointTowards:",
        "gotoX:y:",
        "gotoSpriteOrMouse:",
        "glideSecs:toX:y:elapsed:from:",
        "changeXposBy:",
        "xpos:",
        "changeYposBy:",
        "ypos:",
        "bounceOffEdge",
        "setRotationStyle",
        "xpos",
        "ypos",
        "heading",
        # Stage scrolling, hidden in the 2.0 editor
        "scrollRight",
        "scrollUp",
        "scrollAlign",
        "xScroll",
        "yScroll",
    ),
    BlockCategory.LOOKS: (
        "say:duration:elapsed:from:",
        "say:",
        "think:duration:elapsed:from:",
        "think:",
        "show",
        "hide",
        "lookLike:",
        "nextCostume",
        "startScene",
        "startSceneAndWait",
        "nextScene",
        "changeGraphicEffect:by:",
        "setGraphicEffect:to:",
        "filterReset",
        "changeSizeBy:",
        "setSizeTo:",
        "comeToFront",
        "goBackByLayers:",
        "costumeIndex",
        "costumeName",
        "sceneName",
        "backgroundIndex",
        "scale",
    ),
    BlockCategory.SOUND: (
        "playSound:",
        "doPlaySoundAndWait",
        "stopAllSounds",
        "playDrum",
        "drum:duration:elapsed:from:",
        "rest:elapsed:from:",
        "noteOn:duration:elapsed:from:",
        "instrument:",
        "midiInstrument:",
        "changeVolumeBy:",
        "setVolumeTo:",
        "volume",
        "changeTempoBy:",
        "setTempoTo:",
        "tempo",
    ),
    BlockCategory.PEN: (
        "clearPenTrails",
        "stampCostume",
        "putPenDown",
        "putPenUp",
        "penColor:",
        "changePenHueBy:",
        "setPenHueTo:",
        "changePenShadeBy:",
        "setPenShadeTo:",
        "changePenSizeBy:",
        "penSize:",
    ),
    BlockCategory.EVENTS: (
        "whenGreenFlag",
        "whenKeyPressed",
        "whenClicked",
        "whenSceneStarts",
        "whenSensorGreaterThan",
        "whenIReceive",
        "broadcast:",
        "doBroadcastAndWait",
    ),
    BlockCategory.CONTROL: (
        "wait:elapsed:from:",
        "doRepeat",
        "doForever",
        "doIf",
        "doIfElse",
        "doWaitUntil",
        "doUntil",
        "doWhile",
        "doForLoop",
        "stopScripts",
        "stopAll",
        "doReturn",
        "whenCloned",
        "createCloneOf",
        "deleteClone",
    ),
    BlockCategory.SENSING: (
        "touching:",
        "touchingColor:",
        "color:sees:",
        "distanceTo:",
        "doAsk",
        "answer",
        "keyPressed:",
        "mousePressed",
        "mouseX",
        "mouseY",
        "soundLevel",
        "senseVideoMotion",
        "setVideoState",
        "setVideoTransparency",
        "timer",
        "timerReset",
        "getAttribute:of:",
        "timeAndDate",
        "timestamp",
        "getUserName",
    ),
    BlockCategory.OPERATORS: (
        "+",
        "-",
        "*",
        "/",
        "randomFrom:to:",
        "<",
        "=",
        ">",
        "&",
        "|",
        "not",
        "concatenate:with:",
        "letter:of:",
        "stringLength:",
        "%",
        "rounded",
        "computeFunction:of:",
    ),
    BlockCategory.DATA: (
        "readVariable",
        "setVar:to:",
        "changeVar:by:",
        "showVariable:",
        "hideVariable:",
        "contentsOfList:",
        "append:toList:",
        "deleteLine:ofList:",
        "insert:at:ofList:",
        "setLine:ofList:to:",
        "getLine:ofList:",
        "lineCountOfList:",
        "list:contains:",
        "showList:",
        "hideList:",
    ),
    BlockCategory.MORE_BLOCKS: (
        "procDef",
        "call",
        "getParam",
    ),
}

BLOCK_CATEGORIES: Dict[str, BlockCategory] = {
    selector: category
    for category, selectors in _SELECTORS_BY_CATEGORY.items()
    for selector in selectors
}


def get_category(block_name: str) -> Optional[BlockCategory]:
    """Look up the palette category of a Scratch 2 block selector."""
    return BLOCK_CATEGORIES.get(block_name)
