"""EBML element IDs, data types and reverse lookup by wire ID."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from bbbrecorder.ebml.datatype import DataType
from bbbrecorder.ebml.elementtype import ElementType


@dataclass(frozen=True)
class ElementDef:
    """Wire ID bytes, payload data type and top-level flag of an element."""

    id_bytes: bytes
    data_type: DataType
    top: bool = False


E = ElementType
D = DataType


def _d(raw: list[int], data_type: DataType, top: bool = False) -> ElementDef:
    return ElementDef(bytes(raw), data_type, top)


_TABLE: dict[ElementType, ElementDef] = {
    E.Chapters: _d([0x10, 0x43, 0xA7, 0x70], D.MASTER, True),
    E.SeekHead: _d([0x11, 0x4D, 0x9B, 0x74], D.MASTER, True),
    E.Tags: _d([0x12, 0x54, 0xC3, 0x67], D.MASTER, True),
    E.Info: _d([0x15, 0x49, 0xA9, 0x66], D.MASTER, True),
    E.Tracks: _d([0x16, 0x54, 0xAE, 0x6B], D.MASTER, True),
    E.Segment: _d([0x18, 0x53, 0x80, 0x67], D.MASTER),
    E.Attachments: _d([0x19, 0x41, 0xA4, 0x69], D.MASTER, True),
    E.EBML: _d([0x1A, 0x45, 0xDF, 0xA3], D.MASTER),
    E.Cues: _d([0x1C, 0x53, 0xBB, 0x6B], D.MASTER, True),
    E.Cluster: _d([0x1F, 0x43, 0xB6, 0x75], D.MASTER, True),
    E.Language: _d([0x22, 0xB5, 0x9C], D.STRING),
    E.LanguageIETF: _d([0x22, 0xB5, 0x9D], D.STRING),
    E.TrackTimestampScale: _d([0x23, 0x31, 0x4F], D.FLOAT),
    E.DefaultDecodedFieldDuration: _d([0x23, 0x4E, 0x7A], D.UINT),
    E.DefaultDuration: _d([0x23, 0xE3, 0x83], D.UINT),
    E.CodecName: _d([0x25, 0x86, 0x88], D.STRING),
    E.TimestampScale: _d([0x2A, 0xD7, 0xB1], D.UINT),
    E.ColourSpace: _d([0x2E, 0xB5, 0x24], D.BINARY),
    E.PrevFilename: _d([0x3C, 0x83, 0xAB], D.STRING),
    E.PrevUID: _d([0x3C, 0xB9, 0x23], D.BINARY),
    E.NextFilename: _d([0x3E, 0x83, 0xBB], D.STRING),
    E.NextUID: _d([0x3E, 0xB9, 0x23], D.BINARY),
    E.BlockAddIDName: _d([0x41, 0xA4], D.STRING),
    E.BlockAdditionMapping: _d([0x41, 0xE4], D.MASTER),
    E.BlockAddIDType: _d([0x41, 0xE7], D.UINT),
    E.BlockAddIDExtraData: _d([0x41, 0xED], D.BINARY),
    E.BlockAddIDValue: _d([0x41, 0xF0], D.UINT),
    E.ContentCompAlgo: _d([0x42, 0x54], D.UINT),
    E.ContentCompSettings: _d([0x42, 0x55], D.BINARY),
    E.EBMLVersion: _d([0x42, 0x86], D.UINT),
    E.EBMLMaxIDLength: _d([0x42, 0xF2], D.UINT),
    E.EBMLMaxSizeLength: _d([0x42, 0xF3], D.UINT),
    E.EBMLReadVersion: _d([0x42, 0xF7], D.UINT),
    E.EBMLDocType: _d([0x42, 0x82], D.STRING),
    E.EBMLDocTypeReadVersion: _d([0x42, 0x85], D.UINT),
    E.EBMLDocTypeVersion: _d([0x42, 0x87], D.UINT),
    E.ChapLanguage: _d([0x43, 0x7C], D.STRING),
    E.ChapLanguageIETF: _d([0x43, 0x7D], D.STRING),
    E.ChapCountry: _d([0x43, 0x7E], D.STRING),
    E.SegmentFamily: _d([0x44, 0x44], D.BINARY),
    E.DateUTC: _d([0x44, 0x61], D.DATE),
    E.TagLanguage: _d([0x44, 0x7A], D.STRING),
    E.TagLanguageIETF: _d([0x44, 0x7B], D.STRING),
    E.TagDefault: _d([0x44, 0x84], D.UINT),
    E.TagBinary: _d([0x44, 0x85], D.BINARY),
    E.TagString: _d([0x44, 0x87], D.STRING),
    E.Duration: _d([0x44, 0x89], D.FLOAT),
    E.ChapProcessPrivate: _d([0x45, 0x0D], D.BINARY),
    E.ChapterFlagEnabled: _d([0x45, 0x98], D.UINT),
    E.TagName: _d([0x45, 0xA3], D.STRING),
    E.EditionEntry: _d([0x45, 0xB9], D.MASTER),
    E.EditionUID: _d([0x45, 0xBC], D.UINT),
    E.EditionFlagHidden: _d([0x45, 0xBD], D.UINT),
    E.EditionFlagDefault: _d([0x45, 0xDB], D.UINT),
    E.EditionFlagOrdered: _d([0x45, 0xDD], D.UINT),
    E.FileData: _d([0x46, 0x5C], D.BINARY),
    E.FileMimeType: _d([0x46, 0x60], D.STRING),
    E.FileName: _d([0x46, 0x6E], D.STRING),
    E.FileDescription: _d([0x46, 0x7E], D.STRING),
    E.FileUID: _d([0x46, 0xAE], D.UINT),
    E.ContentEncAlgo: _d([0x47, 0xE1], D.UINT),
    E.ContentEncKeyID: _d([0x47, 0xE2], D.BINARY),
    E.ContentSignature: _d([0x47, 0xE3], D.BINARY),
    E.ContentSigKeyID: _d([0x47, 0xE4], D.BINARY),
    E.ContentSigAlgo: _d([0x47, 0xE5], D.UINT),
    E.ContentSigHashAlgo: _d([0x47, 0xE6], D.UINT),
    E.ContentEncAESSettings: _d([0x47, 0xE7], D.MASTER),
    E.AESSettingsCipherMode: _d([0x47, 0xE8], D.UINT),
    E.MuxingApp: _d([0x4D, 0x80], D.STRING),
    E.Seek: _d([0x4D, 0xBB], D.MASTER),
    E.ContentEncodingOrder: _d([0x50, 0x31], D.UINT),
    E.ContentEncodingScope: _d([0x50, 0x32], D.UINT),
    E.ContentEncodingType: _d([0x50, 0x33], D.UINT),
    E.ContentCompression: _d([0x50, 0x34], D.MASTER),
    E.ContentEncryption: _d([0x50, 0x35], D.MASTER),
    E.SeekID: _d([0x53, 0xAB], D.BINARY),
    E.SeekPosition: _d([0x53, 0xAC], D.UINT),
    E.StereoMode: _d([0x53, 0xB8], D.UINT),
    E.AlphaMode: _d([0x53, 0xC0], D.UINT),
    E.Name: _d([0x53, 0x6E], D.STRING),
    E.CueBlockNumber: _d([0x53, 0x78], D.UINT),
    E.PixelCropBottom: _d([0x54, 0xAA], D.UINT),
    E.DisplayWidth: _d([0x54, 0xB0], D.UINT),
    E.DisplayUnit: _d([0x54, 0xB2], D.UINT),
    E.AspectRatioType: _d([0x54, 0xB3], D.UINT),
    E.DisplayHeight: _d([0x54, 0xBA], D.UINT),
    E.PixelCropTop: _d([0x54, 0xBB], D.UINT),
    E.PixelCropLeft: _d([0x54, 0xCC], D.UINT),
    E.PixelCropRight: _d([0x54, 0xDD], D.UINT),
    E.FlagForced: _d([0x55, 0xAA], D.UINT),
    E.Colour: _d([0x55, 0xB0], D.MASTER),
    E.MatrixCoefficients: _d([0x55, 0xB1], D.UINT),
    E.BitsPerChannel: _d([0x55, 0xB2], D.UINT),
    E.ChromaSubsamplingHorz: _d([0x55, 0xB3], D.UINT),
    E.ChromaSubsamplingVert: _d([0x55, 0xB4], D.UINT),
    E.CbSubsamplingHorz: _d([0x55, 0xB5], D.UINT),
    E.CbSubsamplingVert: _d([0x55, 0xB6], D.UINT),
    E.ChromaSitingHorz: _d([0x55, 0xB7], D.UINT),
    E.ChromaSitingVert: _d([0x55, 0xB8], D.UINT),
    E.Range: _d([0x55, 0xB9], D.UINT),
    E.TransferCharacteristics: _d([0x55, 0xBA], D.UINT),
    E.Primaries: _d([0x55, 0xBB], D.UINT),
    E.MaxCLL: _d([0x55, 0xBC], D.UINT),
    E.MaxFALL: _d([0x55, 0xBD], D.UINT),
    E.MasteringMetadata: _d([0x55, 0xD0], D.MASTER),
    E.PrimaryRChromaticityX: _d([0x55, 0xD1], D.FLOAT),
    E.PrimaryRChromaticityY: _d([0x55, 0xD2], D.FLOAT),
    E.PrimaryGChromaticityX: _d([0x55, 0xD3], D.FLOAT),
    E.PrimaryGChromaticityY: _d([0x55, 0xD4], D.FLOAT),
    E.PrimaryBChromaticityX: _d([0x55, 0xD5], D.FLOAT),
    E.PrimaryBChromaticityY: _d([0x55, 0xD6], D.FLOAT),
    E.WhitePointChromaticityX: _d([0x55, 0xD7], D.FLOAT),
    E.WhitePointChromaticityY: _d([0x55, 0xD8], D.FLOAT),
    E.LuminanceMax: _d([0x55, 0xD9], D.FLOAT),
    E.LuminanceMin: _d([0x55, 0xDA], D.FLOAT),
    E.MaxBlockAdditionID: _d([0x55, 0xEE], D.UINT),
    E.ChapterStringUID: _d([0x56, 0x54], D.STRING),
    E.CodecDelay: _d([0x56, 0xAA], D.UINT),
    E.SeekPreRoll: _d([0x56, 0xBB], D.UINT),
    E.WritingApp: _d([0x57, 0x41], D.STRING),
    E.SilentTracks: _d([0x58, 0x54], D.MASTER),
    E.SilentTrackNumber: _d([0x58, 0xD7], D.UINT),
    E.AttachedFile: _d([0x61, 0xA7], D.MASTER),
    E.ContentEncoding: _d([0x62, 0x40], D.MASTER),
    E.BitDepth: _d([0x62, 0x64], D.UINT),
    E.CodecPrivate: _d([0x63, 0xA2], D.BINARY),
    E.Targets: _d([0x63, 0xC0], D.MASTER),
    E.ChapterPhysicalEquiv: _d([0x63, 0xC3], D.UINT),
    E.TagChapterUID: _d([0x63, 0xC4], D.UINT),
    E.TagTrackUID: _d([0x63, 0xC5], D.UINT),
    E.TagAttachmentUID: _d([0x63, 0xC6], D.UINT),
    E.TagEditionUID: _d([0x63, 0xC9], D.UINT),
    E.TargetType: _d([0x63, 0xCA], D.STRING),
    E.TrackTranslate: _d([0x66, 0x24], D.MASTER),
    E.TrackTranslateTrackID: _d([0x66, 0xA5], D.BINARY),
    E.TrackTranslateCodec: _d([0x66, 0xBF], D.UINT),
    E.TrackTranslateEditionUID: _d([0x66, 0xFC], D.UINT),
    E.SimpleTag: _d([0x67, 0xC8], D.MASTER),
    E.TargetTypeValue: _d([0x68, 0xCA], D.UINT),
    E.ChapProcessCommand: _d([0x69, 0x11], D.MASTER),
    E.ChapProcessTime: _d([0x69, 0x22], D.UINT),
    E.ChapterTranslate: _d([0x69, 0x24], D.MASTER),
    E.ChapProcessData: _d([0x69, 0x33], D.BINARY),
    E.ChapProcess: _d([0x69, 0x44], D.MASTER),
    E.ChapProcessCodecID: _d([0x69, 0x55], D.UINT),
    E.ChapterTranslateID: _d([0x69, 0xA5], D.BINARY),
    E.ChapterTranslateCodec: _d([0x69, 0xBF], D.UINT),
    E.ChapterTranslateEditionUID: _d([0x69, 0xFC], D.UINT),
    E.ContentEncodings: _d([0x6D, 0x80], D.MASTER),
    E.MinCache: _d([0x6D, 0xE7], D.UINT),
    E.MaxCache: _d([0x6D, 0xF8], D.UINT),
    E.ChapterSegmentUID: _d([0x6E, 0x67], D.BINARY),
    E.ChapterSegmentEditionUID: _d([0x6E, 0xBC], D.UINT),
    E.TrackOverlay: _d([0x6F, 0xAB], D.UINT),
    E.Tag: _d([0x73, 0x73], D.MASTER),
    E.SegmentFilename: _d([0x73, 0x84], D.STRING),
    E.SegmentUID: _d([0x73, 0xA4], D.BINARY),
    E.ChapterUID: _d([0x73, 0xC4], D.UINT),
    E.TrackUID: _d([0x73, 0xC5], D.UINT),
    E.AttachmentLink: _d([0x74, 0x46], D.UINT),
    E.BlockAdditions: _d([0x75, 0xA1], D.MASTER),
    E.DiscardPadding: _d([0x75, 0xA2], D.INT),
    E.Projection: _d([0x76, 0x70], D.MASTER),
    E.ProjectionType: _d([0x76, 0x71], D.UINT),
    E.ProjectionPrivate: _d([0x76, 0x72], D.BINARY),
    E.ProjectionPoseYaw: _d([0x76, 0x73], D.FLOAT),
    E.ProjectionPosePitch: _d([0x76, 0x74], D.FLOAT),
    E.ProjectionPoseRoll: _d([0x76, 0x75], D.FLOAT),
    E.OutputSamplingFrequency: _d([0x78, 0xB5], D.FLOAT),
    E.Title: _d([0x7B, 0xA9], D.STRING),
    E.ChapterDisplay: _d([0x80], D.MASTER),
    E.TrackType: _d([0x83], D.UINT),
    E.ChapString: _d([0x85], D.STRING),
    E.CodecID: _d([0x86], D.STRING),
    E.FlagDefault: _d([0x88], D.UINT),
    E.ChapterTrackUID: _d([0x89], D.UINT),
    E.Slices: _d([0x8E], D.MASTER),
    E.ChapterTrack: _d([0x8F], D.MASTER),
    E.ChapterTimeStart: _d([0x91], D.UINT),
    E.ChapterTimeEnd: _d([0x92], D.UINT),
    E.CueRefTime: _d([0x96], D.UINT),
    E.ChapterFlagHidden: _d([0x98], D.UINT),
    E.FlagInterlaced: _d([0x9A], D.UINT),
    E.BlockDuration: _d([0x9B], D.UINT),
    E.FlagLacing: _d([0x9C], D.UINT),
    E.FieldOrder: _d([0x9D], D.UINT),
    E.Channels: _d([0x9F], D.UINT),
    E.BlockGroup: _d([0xA0], D.MASTER),
    E.Block: _d([0xA1], D.BLOCK),
    E.SimpleBlock: _d([0xA3], D.BLOCK),
    E.CodecState: _d([0xA4], D.BINARY),
    E.BlockAdditional: _d([0xA5], D.BINARY),
    E.BlockMore: _d([0xA6], D.MASTER),
    E.Position: _d([0xA7], D.UINT),
    E.CodecDecodeAll: _d([0xAA], D.UINT),
    E.PrevSize: _d([0xAB], D.UINT),
    E.TrackEntry: _d([0xAE], D.MASTER),
    E.PixelWidth: _d([0xB0], D.UINT),
    E.CueDuration: _d([0xB2], D.UINT),
    E.CueTime: _d([0xB3], D.UINT),
    E.SamplingFrequency: _d([0xB5], D.FLOAT),
    E.ChapterAtom: _d([0xB6], D.MASTER),
    E.CueTrackPositions: _d([0xB7], D.MASTER),
    E.FlagEnabled: _d([0xB9], D.UINT),
    E.PixelHeight: _d([0xBA], D.UINT),
    E.CuePoint: _d([0xBB], D.MASTER),
    E.CRC32: _d([0xBF], D.BINARY),
    E.LaceNumber: _d([0xCC], D.UINT),
    E.TrackNumber: _d([0xD7], D.UINT),
    E.CueReference: _d([0xDB], D.MASTER),
    E.Video: _d([0xE0], D.MASTER),
    E.Audio: _d([0xE1], D.MASTER),
    E.TrackOperation: _d([0xE2], D.MASTER),
    E.TrackCombinePlanes: _d([0xE3], D.MASTER),
    E.TrackPlane: _d([0xE4], D.MASTER),
    E.TrackPlaneUID: _d([0xE5], D.UINT),
    E.TrackPlaneType: _d([0xE6], D.UINT),
    E.Timestamp: _d([0xE7], D.UINT),
    E.TimeSlice: _d([0xE8], D.MASTER),
    E.TrackJoinBlocks: _d([0xE9], D.MASTER),
    E.CueCodecState: _d([0xEA], D.UINT),
    E.Void: _d([0xEC], D.BINARY),
    E.TrackJoinUID: _d([0xED], D.UINT),
    E.BlockAddID: _d([0xEE], D.UINT),
    E.CueRelativePosition: _d([0xF0], D.UINT),
    E.CueClusterPosition: _d([0xF1], D.UINT),
    E.CueTrack: _d([0xF7], D.UINT),
    E.ReferencePriority: _d([0xFA], D.UINT),
    E.ReferenceBlock: _d([0xFB], D.INT),
}

del E, D


def _read_vuint(data: bytes) -> int:
    """Decode the variable-length unsigned integer at the start of ``data``."""
    if not data:
        raise EOFError("unexpected EOF")
    first = data[0]
    if first == 0:
        raise ValueError("invalid variable-length integer")
    length = 9 - first.bit_length()
    if len(data) < length:
        raise EOFError("unexpected EOF")
    value = first & (0xFF >> length)
    for byte in data[1:length]:
        value = (value << 8) | byte
    return value


def _build_reverse_table(
    table: Mapping[ElementType, ElementDef],
) -> dict[int, ElementType]:
    return {_read_vuint(definition.id_bytes): element for element, definition in table.items()}


_REVERSE = _build_reverse_table(_TABLE)


def _definition(element: ElementType) -> ElementDef:
    try:
        return _TABLE[element]
    except KeyError:
        raise LookupError(f"no definition for element {element}") from None


def element_bytes(element: ElementType) -> bytes:
    """Return the wire ID bytes of ``element``."""
    return _definition(element).id_bytes


def element_data_type(element: ElementType) -> DataType:
    """Return the data type of ``element``'s payload."""
    return _definition(element).data_type


def is_top_level(element: ElementType) -> bool:
    """Whether ``element`` is a top-level child of a Segment."""
    return _definition(element).top


def element_from_bytes(data: bytes) -> ElementType:
    """Identify the element whose ID starts ``data``.

    Raises ``EOFError`` if the ID is truncated and ``LookupError`` if it is
    not a known element.
    """
    element_id = _read_vuint(bytes(data))
    try:
        return _REVERSE[element_id]
    except KeyError:
        raise LookupError(f"unknown element id 0x{element_id:X}") from None