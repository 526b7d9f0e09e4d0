# voicepitch

A small, dependency-free signal-processing library in plain Python:

* `voicepitch.kissfft` — a mixed-radix complex FFT (radix 2, 3, 4, 5 and a
  generic stage for other primes), with helpers for choosing fast sizes;
* `voicepitch.transform` — a second, self-contained complex FFT class;
* `voicepitch.pitch` — autocorrelation pitch detection on 16-bit PCM frames;
* `voicepitch.buffers` — a bounded producer/consumer queue and sample buffers;
* `voicepitch.audio_format` — a PCM sample format description and its mapping
  to a device data format;
* `voicepitch.debuglog` — numbered dump files for raw data, text and timing.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Complex FFT

```python
from voicepitch.kissfft import FFTPlan, fft, factorize, next_fast_size, next_fast_size_real

plan = FFTPlan(1024, False)               # forward transform of length 1024
spectrum = plan.transform([complex(x) for x in range(1024)])

# every second element of a longer sequence
strided = FFTPlan(8, False).transform(list(range(16)), 2)

# one-shot helper, plan sized to the input
spectrum = fft([1, 0, 0, 0])

factorize(120)             # [(4, 30), (2, 15), (3, 5), (5, 1)]
next_fast_size(1009)       # smallest size >= 1009 with only factors 2, 3 and 5
next_fast_size_real(1009)  # an even fast size for a real transform
```

The inverse transform is not scaled: a forward then an inverse pass multiplies
the data by `nfft`. Sizes below 1, a stride below 1 or too short an input
raise `ValueError`.

`voicepitch.transform.KissFFT(nfft, inverse)` computes the same transform;
its `transform(src)` takes exactly `nfft` values.

## Pitch detection

```python
from voicepitch.pitch import PitchDetector

detector = PitchDetector(48000, 1024, 80_000_000)   # these are the defaults
frequency = detector.process_frame(pcm16_little_endian_bytes)
# -1.0 when the frame is unvoiced; also kept in detector.last_frequency
```

A frame is voiced when the sum of its squared samples reaches the threshold.
Its circular autocorrelation is computed as the inverse FFT of the power
spectrum, and the pitch is the sample rate divided by the lag of the
autocorrelation peak, searched from `frame_size // 10` up to (not including)
`frame_size - frame_size // 10`. The time each frame takes is logged at debug
level.

The module also provides `decode_pcm16(data, count)`, `hanning_coef(n, idx)`,
`find_max_index(values, min_idx, max_idx)` and
`find_closest_index(values, value, min_idx, max_idx)`.

## Buffers and formats

```python
from voicepitch.buffers import ProducerConsumerQueue, allocate_sample_buffers
from voicepitch.audio_format import SampleFormat, PcmRepresentation, to_pcm_format

bufs = allocate_sample_buffers(16, 2048)    # at least 2 buffers
queue = ProducerConsumerQueue(16)
queue.push(bufs[0])        # False if the queue is full
oldest = queue.front()     # IndexError if empty
queue.pop()

fmt = to_pcm_format(SampleFormat(48000, 1024, 1, 16, PcmRepresentation.NONE))
fmt.bytes_per_frame        # 2
```

`to_pcm_format` maps one channel or fewer to mono on the centre speaker and
more to stereo; an extended representation fixes the sample width (8, 16 or
32 bits) and selects the extended data format.

## Debug dumps

```python
from voicepitch.debuglog import AudioLog

with AudioLog("rec", "/tmp/audio") as log:   # writes /tmp/audio_rec_<n>
    log.log(b"\x00\x01")
    log.log_time()          # first call only starts the clock
    log.log_time()          # "<ticks>    <delta>\n", in microseconds
```

`flush()` closes the file; logging again opens the next numbered file.

## What this package does not do

It offers no real-input or multi-dimensional FFTs, no cache of FFT plans, no
FIR filtering, no spectrogram or image output, and no command-line tools. It
does not record from or play to an audio device: the queue, buffer and format
types describe such a pipeline, and `PitchDetector` analyses frames handed to
it.