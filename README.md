# blocksort

This package provides block sorting transforms for lossless compression pipelines. It is written in pure Python and needs no dependencies.

- `blocksort.bwt.BWT` is the Burrows-Wheeler Transform. A block of 256 bytes or more is split into 8 chunks, and each chunk has its own primary index.
- `blocksort.bwts.BWTS` is the bijective variant. It needs no primary index.
- `blocksort.block_codec.BWTBlockCodec` wraps `BWT` and puts the primary indexes in a small header in front of the transformed data. The output can then be inverted with no other information.
- `blocksort.divsufsort.DivSufSort` builds suffix arrays, and it builds the BWT used above.
- `blocksort.sssort.ss_sort` and `blocksort.trsort.tr_sort` are the two sorting stages that `DivSufSort` uses. They work in place on a shared list of integers.
- `blocksort.nullstream.NullOutputStream` is a writable sink that discards everything written to it. It can be used as a context manager. Writing to it after `close()` raises `StreamClosedError`, which is a subclass of `ValueError`.

All transforms take bytes-like input and return `bytes`.

## Installation

```
pip install .
```

For development and tests:

```
pip install .[test]
pytest
```

## Usage

### Bijective BWT

```python
from blocksort.bwts import BWTS

encoded = BWTS().forward(b"mississippi")
assert BWTS().inverse(encoded) == b"mississippi"
```

### BWT with primary indexes

`BWT.forward` records one primary index per chunk. `bwt_chunks(size)` gives the number of chunks. The inverse transform needs these indexes back:

```python
from blocksort.bwt import BWT, bwt_chunks

data = b"SIX.MIXED.PIXIES.SIFT.SIXTY.PIXIE.DUST.BOXES"
encoder = BWT(jobs=1)
encoded = encoder.forward(data)

decoder = BWT(jobs=1)
for i in range(bwt_chunks(len(data))):
    decoder.set_primary_index(i, encoder.primary_index(i))
assert decoder.inverse(encoded) == data
```

`set_primary_index` returns `False` if the chunk number is outside 0–7. If the indexes are corrupted, `inverse` raises `ValueError`.

### Self-contained blocks

`BWTBlockCodec` writes its own header, so one call in each direction is enough:

```python
from blocksort.block_codec import BWTBlockCodec

codec = BWTBlockCodec(bs_version=6, jobs=1)
block = codec.forward(b"abracadabra" * 100)
assert BWTBlockCodec(bs_version=6, jobs=1).inverse(block) == b"abracadabra" * 100
```

With `bs_version` 5 or lower, `inverse` reads the older per-chunk header layout instead.

### Suffix arrays

```python
from blocksort.divsufsort import DivSufSort

sa = DivSufSort().compute_suffix_array(b"mississippi")
# [10, 7, 4, 1, 0, 9, 8, 6, 3, 5, 2]
```

`DivSufSort.compute_bwt(src, chunks)` returns a pair: the transformed bytes and a list of primary indexes. The first byte of the transformed output is the last byte of the input.

## Limits

- `BWT` and `BWTS` accept blocks of at most 1 GiB. They raise `ValueError` for anything larger.
- Blocks shorter than 2 bytes are returned unchanged.
- Blocks of fewer than 256 bytes use a single chunk, and larger blocks use 8.

## What this package does not do

The package only performs the block sorting step. It has no entropy coder and no compressed file or stream format. It also has no command-line tool. To get actual compression, the transformed blocks must be passed to a separate coder.