"""EBML element types and their names."""

from __future__ import annotations

from enum import IntEnum, auto

from bbbrecorder.ebml.errors import EbmlError


class UnknownElementNameError(EbmlError, LookupError):
    """Raised when a name does not correspond to any element type."""

    def __init__(self, name: str) -> None:
        super().__init__(LookupError("unknown element name"), f'parsing "{name}"')
        self.name = name


class ElementType(IntEnum):
    """EBML element types; member names are the element names."""

    Invalid = 0

    EBML = auto()
    EBMLVersion = auto()
    EBMLReadVersion = auto()
    EBMLMaxIDLength = auto()
    EBMLMaxSizeLength = auto()
    EBMLDocType = auto()
    EBMLDocTypeVersion = auto()
    EBMLDocTypeReadVersion = auto()

    CRC32 = auto()
    Void = auto()
    Segment = auto()

    SeekHead = auto()
    Seek = auto()
    SeekID = auto()
    SeekPosition = auto()

    Info = auto()
    SegmentUID = auto()
    SegmentFilename = auto()
    PrevUID = auto()
    PrevFilename = auto()
    NextUID = auto()
    NextFilename = auto()
    SegmentFamily = auto()
    ChapterTranslate = auto()
    ChapterTranslateEditionUID = auto()
    ChapterTranslateCodec = auto()
    ChapterTranslateID = auto()
    TimestampScale = auto()
    Duration = auto()
    DateUTC = auto()
    Title = auto()
    MuxingApp = auto()
    WritingApp = auto()

    Cluster = auto()
    Timestamp = auto()
    SilentTracks = auto()
    SilentTrackNumber = auto()
    Position = auto()
    PrevSize = auto()
    SimpleBlock = auto()
    BlockGroup = auto()
    Block = auto()
    BlockAdditions = auto()
    BlockMore = auto()
    BlockAddID = auto()
    BlockAdditional = auto()
    BlockDuration = auto()
    ReferencePriority = auto()
    ReferenceBlock = auto()
    CodecState = auto()
    DiscardPadding = auto()
    Slices = auto()
    TimeSlice = auto()  # deprecated, dropped in v2
    LaceNumber = auto()  # deprecated, dropped in v2

    Tracks = auto()
    TrackEntry = auto()
    TrackNumber = auto()
    TrackUID = auto()
    TrackType = auto()
    FlagEnabled = auto()
    FlagDefault = auto()
    FlagForced = auto()
    FlagLacing = auto()
    MinCache = auto()
    MaxCache = auto()
    DefaultDuration = auto()
    DefaultDecodedFieldDuration = auto()
    TrackTimestampScale = auto()  # deprecated, dropped in v4
    MaxBlockAdditionID = auto()
    BlockAdditionMapping = auto()
    BlockAddIDValue = auto()
    BlockAddIDName = auto()
    BlockAddIDType = auto()
    BlockAddIDExtraData = auto()
    Name = auto()
    Language = auto()
    LanguageIETF = auto()
    CodecID = auto()
    CodecPrivate = auto()
    CodecName = auto()
    AttachmentLink = auto()  # deprecated, dropped in v4
    CodecDecodeAll = auto()
    TrackOverlay = auto()
    CodecDelay = auto()
    SeekPreRoll = auto()
    TrackTranslate = auto()
    TrackTranslateEditionUID = auto()
    TrackTranslateCodec = auto()
    TrackTranslateTrackID = auto()
    Video = auto()
    FlagInterlaced = auto()
    FieldOrder = auto()
    StereoMode = auto()
    AlphaMode = auto()
    PixelWidth = auto()
    PixelHeight = auto()
    PixelCropBottom = auto()
    PixelCropTop = auto()
    PixelCropLeft = auto()
    PixelCropRight = auto()
    DisplayWidth = auto()
    DisplayHeight = auto()
    DisplayUnit = auto()
    AspectRatioType = auto()
    ColourSpace = auto()
    Colour = auto()
    MatrixCoefficients = auto()
    BitsPerChannel = auto()
    ChromaSubsamplingHorz = auto()
    ChromaSubsamplingVert = auto()
    CbSubsamplingHorz = auto()
    CbSubsamplingVert = auto()
    ChromaSitingHorz = auto()
    ChromaSitingVert = auto()
    Range = auto()
    TransferCharacteristics = auto()
    Primaries = auto()
    MaxCLL = auto()
    MaxFALL = auto()
    MasteringMetadata = auto()
    PrimaryRChromaticityX = auto()
    PrimaryRChromaticityY = auto()
    PrimaryGChromaticityX = auto()
    PrimaryGChromaticityY = auto()
    PrimaryBChromaticityX = auto()
    PrimaryBChromaticityY = auto()
    WhitePointChromaticityX = auto()
    WhitePointChromaticityY = auto()
    LuminanceMax = auto()
    LuminanceMin = auto()
    Projection = auto()
    ProjectionType = auto()
    ProjectionPrivate = auto()
    ProjectionPoseYaw = auto()
    ProjectionPosePitch = auto()
    ProjectionPoseRoll = auto()
    Audio = auto()
    SamplingFrequency = auto()
    OutputSamplingFrequency = auto()
    Channels = auto()
    BitDepth = auto()
    TrackOperation = auto()
    TrackCombinePlanes = auto()
    TrackPlane = auto()
    TrackPlaneUID = auto()
    TrackPlaneType = auto()
    TrackJoinBlocks = auto()
    TrackJoinUID = auto()
    ContentEncodings = auto()
    ContentEncoding = auto()
    ContentEncodingOrder = auto()
    ContentEncodingScope = auto()
    ContentEncodingType = auto()
    ContentCompression = auto()
    ContentCompAlgo = auto()
    ContentCompSettings = auto()
    ContentEncryption = auto()
    ContentEncAlgo = auto()
    ContentEncKeyID = auto()
    ContentEncAESSettings = auto()
    AESSettingsCipherMode = auto()
    ContentSignature = auto()
    ContentSigKeyID = auto()
    ContentSigAlgo = auto()
    ContentSigHashAlgo = auto()

    Cues = auto()
    CuePoint = auto()
    CueTime = auto()
    CueTrackPositions = auto()
    CueTrack = auto()
    CueClusterPosition = auto()
    CueRelativePosition = auto()
    CueDuration = auto()
    CueBlockNumber = auto()
    CueCodecState = auto()
    CueReference = auto()
    CueRefTime = auto()

    Attachments = auto()
    AttachedFile = auto()
    FileDescription = auto()
    FileName = auto()
    FileMimeType = auto()
    FileData = auto()
    FileUID = auto()

    Chapters = auto()
    EditionEntry = auto()
    EditionUID = auto()
    EditionFlagHidden = auto()
    EditionFlagDefault = auto()
    EditionFlagOrdered = auto()
    ChapterAtom = auto()
    ChapterUID = auto()
    ChapterStringUID = auto()
    ChapterTimeStart = auto()
    ChapterTimeEnd = auto()
    ChapterFlagHidden = auto()
    ChapterFlagEnabled = auto()
    ChapterSegmentUID = auto()
    ChapterSegmentEditionUID = auto()
    ChapterPhysicalEquiv = auto()
    ChapterTrack = auto()
    ChapterTrackUID = auto()
    ChapterDisplay = auto()
    ChapString = auto()
    ChapLanguage = auto()
    ChapLanguageIETF = auto()
    ChapCountry = auto()
    ChapProcess = auto()
    ChapProcessCodecID = auto()
    ChapProcessPrivate = auto()
    ChapProcessCommand = auto()
    ChapProcessTime = auto()
    ChapProcessData = auto()

    Tags = auto()
    Tag = auto()
    Targets = auto()
    TargetTypeValue = auto()
    TargetType = auto()
    TagTrackUID = auto()
    TagEditionUID = auto()
    TagChapterUID = auto()
    TagAttachmentUID = auto()
    SimpleTag = auto()
    TagName = auto()
    TagLanguage = auto()
    TagLanguageIETF = auto()
    TagDefault = auto()
    TagString = auto()
    TagBinary = auto()

    @classmethod
    def _missing_(cls, value: object) -> ElementType | None:
        if not isinstance(value, int):
            return None
        member = int.__new__(cls, value)
        member._name_ = None
        member._value_ = value
        return member

    def __str__(self) -> str:
        if self._name_ is None or self._value_ == 0:
            return "unknown"
        return self._name_


# WebM names for the same elements.
TIMECODE_SCALE = ElementType.TimestampScale
TIMECODE = ElementType.Timestamp

_BY_NAME: dict[str, ElementType] = {
    member.name: member for member in ElementType if member is not ElementType.Invalid
}
_BY_NAME["TimecodeScale"] = TIMECODE_SCALE
_BY_NAME["Timecode"] = TIMECODE


def element_type_from_string(s: str) -> ElementType:
    """Look up an element type by its name, WebM aliases included."""
    try:
        return _BY_NAME[s]
    except KeyError:
        raise UnknownElementNameError(s) from None