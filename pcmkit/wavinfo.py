"""Command that prints the header information of a WAVE file."""

from __future__ import annotations

import sys
from typing import List, Optional

from .pcmfile import PcmFile
from .types import FileFormat, PcmError, SampleFormat

_SEPARATOR = "=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-="

_FORMAT_NAMES = {
    0x0000: "Microsoft Unknown Wave Format",
    0x0001: "Microsoft PCM",
    0x0002: "Microsoft ADPCM",
    0x0003: "IEEE Float",
    0x0004: "Compaq Computer VSELP",
    0x0005: "IBM CVSD",
    0x0006: "Microsoft A-Law",
    0x0007: "Microsoft mu-Law",
    0x0008: "Microsoft DTS",
    0x0009: "Microsoft DRM Encrypted Audio",
    0x000A: "Windows Media Audio 9 Voice",
    0x000B: "Windows Media RT Voice",
    0x0010: "OKI ADPCM",
    0x0011: "Intel DVI/IMA ADPCM",
    0x0012: "Videologic MediaSpace ADPCM",
    0x0013: "Sierra ADPCM",
    0x0014: "Antex G.723 ADPCM",
    0x0015: "DSP Solutions DigiSTD",
    0x0016: "DSP Solutions DigiFIX",
    0x0017: "Dialogic OKI ADPCM",
    0x0018: "MediaVision ADPCM",
    0x0019: "Hewlett-Packard CU",
    0x0020: "Yamaha ADPCM",
    0x0021: "Speech Compression Sonarc",
    0x0022: "DSP Group TrueSpeech",
    0x0023: "Echo Speech EchoSC1",
    0x0024: "Audiofile AF36",
    0x0025: "Audio Processing Technology APTX",
    0x0026: "AudioFile AF10",
    0x0027: "Prosody 1612",
    0x0028: "LRC",
    0x0030: "Dolby AC2",
    0x0031: "Microsoft GSM 6.10",
    0x0032: "MSNAudio",
    0x0033: "Antex ADPCME",
    0x0034: "Control Resources VQLPC",
    0x0035: "DigiREAL",
    0x0036: "DigiADPCM",
    0x0037: "Control Resources CR10",
    0x0038: "Natural MicroSystems VBXADPCM",
    0x0039: "Crystal IMA ADPCM",
    0x003A: "EchoSC3",
    0x003B: "Rockwell ADPCM",
    0x003C: "Rockwell Digit LK",
    0x003D: "Xebec",
    0x0040: "Antex Electronics G.721 ADPCM",
    0x0041: "G.728 CELP",
    0x0042: "MS G.723",
    0x0043: "MS G.723.1",
    0x0044: "MS G.729",
    0x0045: "SP G.726",
    0x0050: "MPEG Layer-2 or Layer-1",
    0x0052: "RT24",
    0x0053: "PAC",
    0x0055: "MPEG Layer-3",
    0x0059: "Lucent G.723",
    0x0060: "Cirrus",
    0x0061: "ESPCM",
    0x0062: "Voxware",
    0x0063: "Canopus Atrac",
    0x0064: "G.726 ADPCM",
    0x0065: "G.722 ADPCM",
    0x0066: "DSAT",
    0x0067: "DSAT Display",
    0x0069: "Voxware Byte Aligned",
    0x0070: "Voxware AC8",
    0x0071: "Voxware AC10",
    0x0072: "Voxware AC16",
    0x0073: "Voxware AC20",
    0x0074: "Voxware MetaVoice",
    0x0075: "Voxware MetaSound",
    0x0076: "Voxware RT29HW",
    0x0077: "Voxware VR12",
    0x0078: "Voxware VR18",
    0x0079: "Voxware TQ40",
    0x0080: "Softsound",
    0x0081: "Voxware TQ60",
    0x0082: "MSRT24",
    0x0083: "G.729A",
    0x0084: "MVI MV12",
    0x0085: "DF G.726",
    0x0086: "DF GSM610",
    0x0088: "ISIAudio",
    0x0089: "Onlive",
    0x0091: "SBC24",
    0x0092: "Dolby AC3 SPDIF",
    0x0093: "MediaSonic G.723",
    0x0094: "Aculab PLC  Prosody 8kbps",
    0x0097: "ZyXEL ADPCM",
    0x0098: "Philips LPCBB",
    0x0099: "Packed",
    0x00FF: "AAC",
    0x0100: "Rhetorex ADPCM",
    0x0101: "IBM mu-law",
    0x0102: "IBM A-law",
    0x0103: "IBM AVC ADPCM",
    0x0111: "Vivo G.723",
    0x0112: "Vivo Siren",
    0x0123: "Digital G.723",
    0x0125: "Sanyo LD ADPCM",
    0x0130: "Sipro Lab Telecom ACELP NET / RealAudio 4.0/5.0)",
    0x0131: "Sipro Lab Telecom ACELP 4800",
    0x0132: "Sipro Lab Telecom ACELP 8V3",
    0x0133: "Sipro Lab Telecom G.729",
    0x0134: "Sipro Lab Telecom G.729A",
    0x0135: "Sipro Lab Telecom Kelvin",
    0x0140: "Windows Media Video V8",
    0x0150: "Qualcomm PureVoice",
    0x0151: "Qualcomm HalfRate",
    0x0155: "Ring Zero Systems TUB GSM",
    0x0160: "Microsoft Audio 1",
    0x0161: "Windows Media 7/8/9",
    0x0162: "Windows Media 9 Professional",
    0x0163: "Windows Media 9 Lossless",
    0x0164: "Windows Media Professional over S/PDIF",
    0x0180: "MPEG-2 AAC",
    0x0190: "DTS",
    0x0200: "Creative Labs ADPCM",
    0x0202: "Creative Labs FastSpeech8",
    0x0203: "Creative Labs FastSpeech10",
    0x0210: "UHER Informatic GmbH ADPCM",
    0x0215: "Ulead DV Audio NTSC",
    0x0216: "Ulead DV Audio PAL",
    0x0220: "Quarterdeck",
    0x0230: "I-link Worldwide VC",
    0x0240: "Aureal RAW Sport",
    0x0250: "Interactive Products HSX",
    0x0251: "Interactive Products RPELP",
    0x0260: "Consistent Software CS2",
    0x0270: "Sony SCX / RealAudio 8.0",
    0x0271: "Sony SCY",
    0x0272: "Sony ATRAC3",
    0x0273: "Sony SPC",
    0x0300: "Fujitsu FM Towns Snd",
    0x0400: "BTV Digital",
    0x0401: "Intel Music Coder",
    0x0450: "QDesign Music",
    0x0680: "VME VMPCM",
    0x0681: "AT&T Labs TPC",
    0x08AE: "ClearJump LiteWave",
    0x1000: "Olivetti GSM",
    0x1001: "Olivetti ADPCM",
    0x1002: "Olivetti CELP",
    0x1003: "Olivetti SBC",
    0x1004: "Olivetti OPR",
    0x1100: "L&H Codec",
    0x1101: "L&H CELP",
    0x1102: "L&H SBC 0x1102",
    0x1103: "L&H SBC 0x1103",
    0x1104: "L&H SBC 0x1104",
    0x1400: "Norris",
    0x1401: "AT&T ISIAudio",
    0x1500: "Soundspace Music Compression",
    0x181C: "VoxWare RT24 Speech",
    0x1971: "Sonic Foundry Perfect Clarity Audio (PCA)",
    0x1FC4: "NCT Soft ALF2CD",
    0x2000: "Dolby AC3",
    0x2001: "Dolby DTS",
    0x2002: "RealAudio 1.0 (14.4K)",
    0x2003: "RealAudio 2.0 (28.8K)",
    0x2004: "RealAudio G2 (Cook)",
    0x2005: "RealAudio 3.0 (DolbyNet AC3)",
    0x2006: "RealAudio 10.0 (LC-AAC)",
    0x2007: "RealAudio 10.0 (HE-AAC)",
    0x2048: "Sonic",
    0x4143: "Divio AAC",
    0x4201: "Nokia AMR",
    0x566F: "Vorbis",
    0x5756: "WavPack",
    0x674F: "Ogg Vorbis 1",
    0x6750: "Ogg Vorbis 2",
    0x6751: "Ogg Vorbis 3",
    0x676F: "Ogg Vorbis 1+",
    0x6770: "Ogg Vorbis 2+",
    0x6771: "Ogg Vorbis 3+",
    0x7A21: "Adaptive Multirate",
    0x7A22: "Adaptive Multirate w/ silence detection",
    0x706D: "AAC",
    0x77A1: "TTA",
    0xA106: "MPEG-4 AAC",
    0xA109: "Speex",
    0xF1AC: "FLAC",
    0xFFFE: "{ Extensible }",
    0xFFFF: "{ Development }",
}


def format_name(tag: int) -> Optional[str]:
    """Return the name of a WAVE format tag, or None if it is not known."""
    return _FORMAT_NAMES.get(tag)


def format_report(name: str, pcm_file: PcmFile) -> str:
    """Return the multi-line information report for an opened file."""
    kind = format_name(pcm_file.internal_fmt)
    lines = [_SEPARATOR, "File:", f"   Name:          {name}"]
    if pcm_file.seekable:
        lines.append(f"   File Size:     {pcm_file.file_size}")
    else:
        lines.append("   File Size:     unknown")

    lines.append("Format:")
    if kind is None:
        lines.append(f"   Type:          unknown - 0x{pcm_file.internal_fmt:04X}")
    else:
        lines.append(f"   Type:          {kind}")
    lines.append(f"   Channels:      {pcm_file.channels}")
    lines.append(f"   Sample Rate:   {pcm_file.sample_rate} Hz")
    lines.append(f"   Avg bytes/sec: {pcm_file.block_align * pcm_file.sample_rate}")
    lines.append(f"   Block Align:   {pcm_file.block_align} bytes")
    lines.append(f"   Bit Width:     {pcm_file.bit_width}")
    if pcm_file.ch_mask > 0:
        lines.append(f"   Channel Mask:  0x{pcm_file.ch_mask:03X}")

    lines.append("Data:")
    lines.append(f"   Start:         {pcm_file.data_start}")
    lines.append(f"   Data Size:     {pcm_file.data_size}")
    leftover = pcm_file.file_size - pcm_file.data_size - pcm_file.data_start
    if leftover < 0:
        if not pcm_file.seekable:
            lines.append("   [ warning! unable to verify true data size ]")
        else:
            lines.append("   [ warning! reported data size is larger than file size ]")
    elif leftover > 0:
        lines.append(f"   Leftover:  {leftover} bytes")

    if pcm_file.internal_fmt in (0x0001, 0x0003):
        playtime = pcm_file.samples / pcm_file.sample_rate
        lines.append(f"   Samples:       {pcm_file.samples}")
        lines.append(f"   Playing Time:  {playtime:.2f} sec")
    else:
        lines.append("   Samples:       unknown")
        lines.append("   Playing Time:  unknown")
    lines.append(_SEPARATOR)
    return "\n" + "".join(line + "\n" for line in lines) + "\n"


def _report_stream(name: str, fp) -> int:
    try:
        pcm_file = PcmFile(fp, SampleFormat.UNKNOWN, FileFormat.WAVE)
    except PcmError as exc:
        print(f"error reading {name}: {exc}", file=sys.stderr)
        return 1
    with pcm_file:
        sys.stdout.write(format_report(name, pcm_file))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Print information about a WAVE file, or about standard input."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) > 1:
        print("\nusage: wavinfo [test.wav]\n", file=sys.stderr)
        return 1
    if not args:
        return _report_stream("[stdin]", sys.stdin.buffer)
    try:
        fp = open(args[0], "rb")
    except OSError:
        print("cannot open file", file=sys.stderr)
        return 1
    with fp:
        return _report_stream(args[0], fp)


if __name__ == "__main__":
    sys.exit(main())