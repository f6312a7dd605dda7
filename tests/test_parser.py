from itinerary_agent.models import Citation
from itinerary_agent.parser import parse_itinerary


def test_sample_day_with_two_activities(sample_markdown):
    days = parse_itinerary(sample_markdown)
    assert len(days) == 1
    assert days[0].day == 1
    temple, park = days[0].activities
    assert temple.name == "Temple A"
    assert temple.time == "09:00-17:00"
    assert temple.cost == "JPY 400"
    assert temple.link == "https://x.example"
    assert park.name == "Park B"
    assert park.time == "Buka 24 jam"
    assert park.cost == "Gratis"
    assert park.link == ""
    assert park.sources is None


def test_no_day_headers_gives_empty_list():
    assert parse_itinerary("") == []
    assert parse_itinerary("Here is your plan!\nEnjoy the trip.") == []
    orphan = "- **Temple A**: 09:00 | Estimasi Biaya: JPY 400 | [Cek Harga](#)"
    assert parse_itinerary(orphan) == []


def test_activity_before_first_header_is_dropped():
    text = "\n".join([
        "- **Orphan**: 08:00 | Estimasi Biaya: JPY 100 | [Cek Harga](#)",
        "**Hari 1**",
        "- **Kept**: 09:00 | Estimasi Biaya: JPY 200 | [Cek Harga](#)",
    ])
    days = parse_itinerary(text)
    assert [d.day for d in days] == [1]
    assert [a.name for a in days[0].activities] == ["Kept"]


def test_order_is_preserved_and_days_need_not_be_contiguous(two_day_markdown):
    text = two_day_markdown + "**Hari 5**\n- **Late**: sore | Estimasi Biaya: JPY 1 | [Cek Harga](#)\n"
    days = parse_itinerary(text)
    assert [d.day for d in days] == [1, 2, 5]
    assert [a.name for a in days[1].activities] == ["Tenryu-ji Temple", "Nishiki Market"]


def test_duplicate_day_numbers_are_not_merged():
    text = "\n".join([
        "**Hari 1**",
        "- **A**: pagi | Estimasi Biaya: JPY 1 | [Cek Harga](#)",
        "**Hari 1**",
        "- **B**: sore | Estimasi Biaya: JPY 2 | [Cek Harga](#)",
    ])
    days = parse_itinerary(text)
    assert [d.day for d in days] == [1, 1]
    assert [d.activities[0].name for d in days] == ["A", "B"]


def test_header_with_trailing_content_is_ignored():
    text = "\n".join([
        "**Hari 1** - Kyoto",
        "- **A**: pagi | Estimasi Biaya: JPY 1 | [Cek Harga](#)",
        "**Hari 2**",
    ])
    days = parse_itinerary(text)
    assert [d.day for d in days] == [2]
    assert days[0].activities == []


def test_stray_prose_and_blank_lines_do_not_end_a_day():
    text = "\n".join([
        "**Hari 1**",
        "",
        "Pagi hari dimulai dengan sarapan.",
        "- **A**: pagi | Estimasi Biaya: JPY 1 | [Cek Harga](#)",
        "   ",
        "- malformed bullet without the expected fields",
        "- **B**: sore | Estimasi Biaya: JPY 2 | [Cek Harga](https://b.example)",
    ])
    days = parse_itinerary(text)
    assert [a.name for a in days[0].activities] == ["A", "B"]


def test_windows_line_endings():
    text = "**Hari 3**\r\n- **A**: pagi | Estimasi Biaya: USD 5 | [Cek Harga](#)\r\n"
    days = parse_itinerary(text)
    assert days[0].day == 3
    assert days[0].activities[0].cost == "USD 5"


def test_citations_attach_to_overlapping_activity(two_day_markdown):
    start = two_day_markdown.index("Nishiki Market")
    citation = Citation(
        uri="https://www.kyoto-nishiki.or.jp/",
        title="Nishiki Market",
        start_index=start,
        end_index=start + 5,
    )
    days = parse_itinerary(two_day_markdown, [citation])
    market = days[1].activities[1]
    assert [s.uri for s in market.sources] == ["https://www.kyoto-nishiki.or.jp/"]
    assert market.sources[0].title == "Nishiki Market"
    assert days[1].activities[0].sources is None
    assert days[0].activities[0].sources is None
