#!/usr/bin/env python3
"""
IMA ADPCM WAV to raw PCM converter.

Reads a canonical WAV file holding 4-bit IMA/DVI ADPCM, skips the header,
decodes the payload and writes signed 16-bit PCM (little-endian by default).
"""

import argparse
import os
import sys

from imatools.adpcm import DviAdpcmDecoder, NIBBLE_ORDERS, TAIL_POLICIES
from imatools.common.riff import CANONICAL_HEADER_SIZE, parse_header, describe_header
from imatools.common.pcm import write_pcm, write_wav, dump_payload

DEFAULT_RATE = 22050


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Decode IMA ADPCM audio to 16-bit PCM.")
    parser.add_argument("input", nargs="?", default="target.wav", help="Input ADPCM WAV file (default: target.wav)")
    parser.add_argument("--output", default="out.pcm", help="Raw PCM output path (default: out.pcm)")
    parser.add_argument("--header-size", type=int, default=CANONICAL_HEADER_SIZE, help="Bytes to skip before the ADPCM payload (default: 44)")
    parser.add_argument("--info", action="store_true", help="Print the WAV header fields")
    parser.add_argument("--dump", metavar="FILE", help="Also write the undecoded ADPCM payload to FILE")
    parser.add_argument("--wav", metavar="FILE", help="Also write the decoded samples as a WAV file")
    parser.add_argument("--rate", type=int, help="Sample rate for --wav (default: from header, else 22050)")
    parser.add_argument("--big-endian", action="store_true", help="Write big-endian PCM")
    parser.add_argument("--tail", choices=TAIL_POLICIES, default="full", help="Decode every code, or stop one short of the end")
    parser.add_argument("--nibble-order", choices=NIBBLE_ORDERS, default="hi_lo", help="Nibble order within each byte (default: hi_lo)")
    return parser.parse_args(argv)


def resolve_rate(args, data):
    if args.rate is not None:
        return args.rate
    # Headerless or non-RIFF input carries no sample rate
    if args.header_size < CANONICAL_HEADER_SIZE:
        return DEFAULT_RATE
    try:
        header = parse_header(data)
    except ValueError:
        return DEFAULT_RATE
    if header['chunk_id'] != b'RIFF' or header['sample_rate'] <= 0:
        return DEFAULT_RATE
    return header['sample_rate']


def main(argv=None):
    args = parse_args(argv)

    if not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}")
        sys.exit(1)

    if args.header_size < 0:
        print(f"Error: Invalid header size: {args.header_size}")
        sys.exit(1)

    if args.rate is not None and args.rate <= 0:
        print(f"Error: Invalid sample rate: {args.rate}")
        sys.exit(1)

    with open(args.input, 'rb') as f:
        data = f.read()

    if len(data) < args.header_size:
        print(f"Error: {args.input} is {len(data)} bytes, shorter than the {args.header_size} byte header")
        sys.exit(1)

    if args.info:
        print("Building file information...")
        try:
            for line in describe_header(data):
                print(line)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

    payload = data[args.header_size:]

    if args.dump:
        dump_payload(payload, args.dump)
        print(f"Dumped {len(payload)} ADPCM bytes to {args.dump}")

    print(f"Decoding {len(payload)} bytes ({args.nibble_order}, tail={args.tail})...")
    decoder = DviAdpcmDecoder(nibble_order=args.nibble_order, tail=args.tail)
    samples = decoder.decode(payload)

    print("Writing to file...")
    write_pcm(samples, args.output, big_endian=args.big_endian)
    print(f"Saved {len(samples)} samples to {args.output}")

    if args.wav:
        rate = resolve_rate(args, data)
        write_wav(samples, args.wav, rate)
        print(f"Saved {args.wav} ({rate} Hz)")


if __name__ == "__main__":
    main()
