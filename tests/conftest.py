import pytest

from exifdir.tiff_buffer import ByteOrder, TiffBuffer

from tests.tiff_builder import BE, LE, sample_tiff


@pytest.fixture(params=[LE, BE], ids=['little', 'big'])
def endian(request):
    return request.param


@pytest.fixture
def sample(endian):
    return sample_tiff(endian)


@pytest.fixture
def make_buffer():
    def _make(data: bytes, endian: str = LE) -> TiffBuffer:
        return TiffBuffer(data, ByteOrder.LITTLE if endian == LE else ByteOrder.BIG)
    return _make
