import pytest

from llama.reader.parser import parse
from llama.render.xml import Element, escape_xml, strip_quote, to_attribute_value, to_node, to_xml
from llama.types.datum import List, Number, Procedure, Quote, Splice, String
from llama.types.errors import LlamaRenderError
from llama.types.symbol import Symbol


@pytest.fixture
def xml(interp):
    return interp.to_xml


def test_template_to_xml(xml):
    source = """
        (let ([(items x ...) (ul (li x) ...)])
          (items "a" "b"))
    """
    assert xml(source) == "<ul><li>a</li><li>b</li></ul>"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(br)", "<br/>"),
        ('(p "x")', "<p>x</p>"),
        ('(p () "x")', "<p>x</p>"),
        ('"just text"', "just text"),
        ("42", "42"),
        ("'word", "word"),
        ('(p "a" 1 word)', "<p>a1word</p>"),
        ('(a ([href "/x"] [id main]) "link")', '<a href="/x" id="main">link</a>'),
        ("(td ([colspan 2]))", '<td colspan="2"/>'),
        ('(td ([label "2 items"]))', '<td label="`2 items"/>'),
        ("(td ([offset -x]))", '<td offset="`-x"/>'),
        ('(div ([data (point ([x 1]) "label")]))', '<div data="{point x=1, label}"/>'),
        ('(p "a < b & \\"c\\"")', "<p>a &lt; b &amp; &quot;c&quot;</p>"),
        ('(p ([title "<x>"]))', '<p title="&lt;x&gt;"/>'),
        ("(repeat 1 (p))", "<p/>"),
        ('(ul (let () (li) (li "b")))', "<ul><li/><li>b</li></ul>"),
        ('(p (comment "hidden") "shown")', "<p>shown</p>"),
    ],
)
def test_to_xml(xml, source, expected):
    assert xml(source) == expected


def test_second_item_is_attributes_only_when_shaped_like_them(xml):
    assert xml("(p (b x))") == "<p><b>x</b></p>"
    # A list of two-item lists headed by symbols reads as attributes.
    assert xml("(p ((b x)))") == '<p b="x"/>'


@pytest.mark.parametrize(
    "source,message",
    [
        ("(p ([a 1] [a 2]))", "Duplicate attribute"),
        ('("p" "x")', "invalid for use as a tag name"),
        ("()", "invalid for use as a tag name"),
        ("(repeat 2 (p))", "exactly one root"),
        ("(repeat 0 (p))", "exactly one root"),
        ("(p conc)", "XML node cannot have type"),
    ],
)
def test_render_errors(xml, source, message):
    with pytest.raises(LlamaRenderError, match=message):
        xml(source)


def test_strip_quote_is_deep():
    tree = Quote(List([Quote(Symbol("p")), Splice([Quote(Quote(String("x")))])]))
    assert strip_quote(tree) == List([Symbol("p"), Splice([String("x")])])


def test_to_node_inlines_splices():
    tree = List([Symbol("ul"), Splice([List([Symbol("li")]), String("t")])])
    assert to_node(tree) == Element("ul", {}, [Element("li"), String("t")])


def test_to_node_attributes():
    node = to_node(parse("(img ([src a.png] [w 3]))"))
    assert node == Element("img", {"src": String("a.png"), "w": Number("3")}, [])


def test_attribute_value_cannot_be_a_callable():
    tree = List([Symbol("p"), List([List([Symbol("on"), Procedure(len)])])])
    with pytest.raises(LlamaRenderError, match="cannot have a procedure value"):
        to_node(tree)


def test_to_attribute_value():
    assert to_attribute_value(Number("1.5")) == "1.5"
    assert to_attribute_value(String(".5em")) == "`.5em"
    assert to_attribute_value(String("+1")) == "`+1"
    assert to_attribute_value(String("plain")) == "plain"
    assert to_attribute_value(Element("a", {"x": String("y")}, [String("z"), Element("b")])) == "{a x=y, z, {b }}"


def test_escape_xml():
    assert escape_xml("""<a href='x'>"&"</a>""") == "&lt;a href=&apos;x&apos;&gt;&quot;&amp;&quot;&lt;/a&gt;"


def test_to_xml_of_node():
    node = Element("p", {"class": String("note")}, [String("hi"), Element("br")])
    assert to_xml(node) == '<p class="note">hi<br/></p>'
