import io
import logging
import os
import pytest
from bedutils import bedwriter
from bedutils.bedwriter import BEDSerializer
from bedutils.aliases import SynonymAdaptor
from bedutils.exceptions import BEDValidationError
from bedutils.feature import Feature, Exon, Transcript, Translation, Slice
from .transcript_test_base import chr1, make_transcript

expected_coding = [
    'chr1', 1000, 2000, 'ENST1', 0, '+', 1050, 1950, 0, 3,
    '100,100,100,', '0,500,900,']


def test_simple_feature():
    f = Feature(100, 200, 1, 'X', seqid='1')
    assert bedwriter.feature_to_bed_array(f, {}) == \
        ['1', 99, 200, 'X', 0, '+']


def test_simple_feature_minus_strand():
    f = Feature(100, 200, -1, 'X', seqid='1')
    assert bedwriter.feature_to_bed_array(f, {})[5] == '-'


def test_simple_feature_not_reference():
    s = Slice('1', seq_region_length=1000, is_reference=False,
              adaptor=SynonymAdaptor())
    f = Feature(100, 200, 1, 'X', slice=s)
    assert bedwriter.to_bed_array(f, {}) == ['1', 99, 200, 'X', 0, '+']


def test_simple_feature_mt():
    s = Slice('MT', seq_region_length=16569)
    f = Feature(100, 200, 1, 'X', slice=s)
    assert bedwriter.to_bed_array(f, {})[0] == 'chrM'


def test_simple_feature_on_subslice():
    s = Slice('1', 901, 3000, -1, seq_region_length=10000)
    f = Feature(101, 200, 1, 'X', slice=s)
    assert bedwriter.to_bed_array(f, {}) == ['1', 2800, 2900, 'X', 0, '-']


def test_missing_display_id():
    f = Feature(1, 10, 1, seqid='1')
    assert bedwriter.feature_to_bed_array(f, {})[3] == '.'


def test_exon_is_bed6():
    s = chr1()
    assert bedwriter.to_bed_array(Exon(1001, 1100, 1, 'ENSE1', slice=s), {}) \
        == ['chr1', 1000, 1100, 'ENSE1', 0, '+']


def test_coding_transcript():
    t = make_transcript(chr1())
    bed = bedwriter.to_bed_array(t, {})
    assert bed == expected_coding


def test_coding_transcript_minus_strand():
    # cDNA start/end are swapped so thickStart < thickEnd
    t = make_transcript(chr1(), strand=-1)
    bed = bedwriter.to_bed_array(t, {})
    assert bed == expected_coding[:5] + ['-'] + expected_coding[6:]


def test_transcript_on_forward_subslice():
    sub = Slice('1', 901, 3000, seq_region_length=10000,
                adaptor=SynonymAdaptor())
    t = make_transcript(sub, offset=900)
    assert bedwriter.to_bed_array(t, {}) == expected_coding


def test_transcript_on_reverse_subslice():
    # Same transcript as make_transcript(), seen from a reverse-strand slice
    # covering 901-3000.
    sub = Slice('1', 901, 3000, -1, seq_region_length=10000,
                adaptor=SynonymAdaptor())
    e1 = Exon(1901, 2000, -1, 'ENSE1', slice=sub)
    e2 = Exon(1401, 1500, -1, 'ENSE2', slice=sub)
    e3 = Exon(1001, 1100, -1, 'ENSE3', slice=sub)
    t = Transcript(1001, 2000, -1, 'ENST1', slice=sub, exons=[e1, e2, e3],
                   translation=Translation(e1, 51, e3, 50))
    assert bedwriter.to_bed_array(t, {}) == expected_coding


def test_noncoding_transcript():
    t = make_transcript(chr1(), coding=False)
    bed = bedwriter.to_bed_array(t, {})
    # thick start is the transcript end, not shifted to 0-based
    assert bed[6] == bed[7] == 2000
    assert bed[:6] == expected_coding[:6]
    assert bed[8:] == expected_coding[8:]


def test_block_lists():
    s = chr1()
    exons = [Exon(1201, 1210, 1, slice=s), Exon(1001, 1050, 1, slice=s),
             Exon(1500, 1500, 1, slice=s)]
    t = Transcript(1001, 1500, 1, 'T', slice=s, exons=exons)
    bed = bedwriter.to_bed_array(t, {})
    assert len(bed) == 12
    sizes = bed[10].rstrip(',').split(',')
    starts = bed[11].rstrip(',').split(',')
    assert bed[9] == len(sizes) == len(starts) == 3
    assert starts == ['0', '200', '499']
    assert sizes == ['50', '10', '1']
    assert bed[10].endswith(',') and bed[11].endswith(',')


def test_transcript_without_exons():
    t = Transcript(1001, 2000, 1, 'T', slice=chr1(), exons=[])
    assert bedwriter.to_bed_array(t, {}) == [
        'chr1', 1000, 2000, 'T', 0, '+', 2000, 2000, 0, 0, '', '']


def test_transcript_without_slice():
    exons = [Exon(11, 20, 1, seqid='7'), Exon(31, 40, 1, seqid='7')]
    t = Transcript(11, 40, 1, 'T', seqid='7', exons=exons,
                   translation=Translation(exons[0], 3, exons[1], 8))
    assert bedwriter.to_bed_array(t, {}) == [
        '7', 10, 40, 'T', 0, '+', 12, 38, 0, 2, '10,10,', '0,20,']


def test_transcript_lazy_exons():
    s = chr1()
    calls = []

    def loader(transcript):
        calls.append(1)
        return [Exon(1001, 1100, 1, slice=s)]

    t = Transcript(1001, 1100, 1, 'T', slice=s, exon_loader=loader)
    bed = bedwriter.to_bed_array(t, {})
    assert bed[9:] == [1, '100,', '0,']
    assert calls == [1]


def test_to_bed_line():
    assert bedwriter.to_bed_line(['1', 99, 200, 'X', 0, '+']) == \
        '1\t99\t200\tX\t0\t+'


def test_print_feature_to_stream():
    out = io.StringIO()
    writer = BEDSerializer(out)
    assert writer.print_feature(Feature(100, 200, 1, 'X', seqid='7')) is True
    assert writer.print_feature(make_transcript(chr1())) is True
    lines = out.getvalue().split('\n')
    assert lines[0] == '7\t99\t200\tX\t0\t+'
    assert lines[1].split('\t') == [str(i) for i in expected_coding]
    assert lines[2] == ''
    assert writer.n_written == 2
    assert writer.cache == {'7': '7', '1': 'chr1'}


def test_print_feature_none():
    out = io.StringIO()
    writer = BEDSerializer(out)
    assert writer.print_feature(None) is None
    assert out.getvalue() == ''
    assert writer.n_written == 0


def test_zero_length_feature_written():
    out = io.StringIO()
    writer = BEDSerializer(out)
    assert writer.print_feature(Feature(101, 100, 1, 'X', seqid='1'))
    assert out.getvalue() == '1\t100\t100\tX\t0\t+\n'


def test_caller_cache():
    out = io.StringIO()
    cache = {'1': 'one'}
    writer = BEDSerializer(out)
    writer.print_features([Feature(1, 2, 1, 'a', slice=chr1()),
                           Feature(3, 4, 1, 'b', slice=chr1())], cache)
    assert out.getvalue() == 'one\t0\t2\ta\t0\t+\none\t2\t4\tb\t0\t+\n'
    assert writer.cache == {}

    shared = {}
    writer = BEDSerializer(io.StringIO(), cache=shared)
    writer.print_feature(Feature(1, 2, 1, 'a', slice=chr1()))
    assert shared == {'1': 'chr1'}


def test_print_to_file(tmpdir):
    fn = str(tmpdir.join('out.bed'))
    with BEDSerializer(fn) as writer:
        writer.print_feature(make_transcript(chr1()))
    assert open(fn).read() == \
        '\t'.join(str(i) for i in expected_coding) + '\n'


def test_in_place(tmpdir):
    fn = tmpdir.join('out.bed')
    fn.write('old contents\n')
    writer = BEDSerializer(str(fn), in_place=True)
    writer.print_feature(Feature(100, 200, 1, 'X', seqid='1'))
    assert fn.read() == 'old contents\n'
    writer.close()
    assert fn.read() == '1\t99\t200\tX\t0\t+\n'


def test_in_place_error_keeps_original(tmpdir):
    fn = tmpdir.join('out.bed')
    fn.write('old contents\n')
    with pytest.raises(RuntimeError):
        with BEDSerializer(str(fn), in_place=True) as writer:
            writer.print_feature(Feature(100, 200, 1, 'X', seqid='1'))
            raise RuntimeError('interrupted')
    assert fn.read() == 'old contents\n'
    assert not os.path.exists(writer.temp_file.name)
    assert writer.out_stream.closed


def test_error_closes_stream():
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        with BEDSerializer(out):
            raise RuntimeError('interrupted')
    assert out.closed


def test_in_place_stream():
    with pytest.raises(ValueError):
        BEDSerializer(io.StringIO(), in_place=True)
    with pytest.raises(ValueError):
        BEDSerializer(in_place=True)


def test_stdout(capsys):
    writer = BEDSerializer()
    writer.print_feature(Feature(100, 200, -1, 'X', seqid='1'))
    writer.close()
    assert capsys.readouterr().out == '1\t99\t200\tX\t0\t-\n'


def test_strict():
    writer = BEDSerializer(io.StringIO(), strict=True)
    with pytest.raises(BEDValidationError):
        writer.print_feature(Feature(200, 100, 1, 'X', seqid='1'))
    with pytest.raises(BEDValidationError):
        writer.print_feature(Feature(100, 200, 0, 'X', seqid='1'))

    t = make_transcript(chr1())
    t.get_all_exons()[0].start = 901
    with pytest.raises(BEDValidationError):
        writer.print_feature(t)
    assert writer.n_written == 0


def test_permissive_by_default():
    t = make_transcript(chr1())
    t.get_all_exons()[0].start = 901
    writer = BEDSerializer(io.StringIO())
    assert writer.print_feature(t)
    assert writer.print_feature(Feature(100, 200, 0, 'X', seqid='1'))


def test_verbose_levels():
    for verbose, level in [('debug', logging.DEBUG),
                           (True, logging.INFO),
                           (False, logging.ERROR),
                           (None, logging.ERROR)]:
        writer = BEDSerializer(io.StringIO(), verbose=verbose)
        assert bedwriter.logger.level == level
        assert writer.verbose == verbose


def test_debug_logging(caplog):
    writer = BEDSerializer(io.StringIO(), verbose='debug')
    with caplog.at_level(logging.DEBUG, logger='bedutils.naming'):
        writer.print_feature(None)
        writer.print_feature(Feature(1, 10, 1, 'X', slice=chr1()))
    records = [(r.name, r.levelno, r.getMessage()) for r in caplog.records]
    assert ('bedutils.bedwriter', logging.DEBUG,
            'skipping empty feature None') in records
    assert ('bedutils.naming', logging.DEBUG,
            'resolved region 1 to chr1') in records


def test_quiet_by_default(caplog):
    writer = BEDSerializer(io.StringIO())
    writer.print_feature(None)
    writer.close()
    assert [r for r in caplog.records if r.name == 'bedutils.bedwriter'] == []
