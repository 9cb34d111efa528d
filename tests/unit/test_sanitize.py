from recipe_form.core.sanitize import is_safe_image_url, sanitize_html


def test_formatting_markup_passes_through():
    html = "<h3>Pasta</h3><ul><li><strong>200g</strong> spaghetti</li></ul><p>Boil.</p>"
    assert sanitize_html(html) == html


def test_script_is_removed_with_content():
    assert sanitize_html("<p>Eat</p><script>alert(1)</script>") == "<p>Eat</p>"


def test_event_handlers_and_unknown_tags_are_stripped():
    out = sanitize_html('<p onclick="steal()">Hi <img src=x onerror="steal()"> there</p>')
    assert out == "<p>Hi  there</p>"


def test_javascript_links_lose_href():
    out = sanitize_html('<a href="javascript:alert(1)">x</a><a href="https://example.com/r">r</a>')
    assert out == '<a>x</a><a href="https://example.com/r" rel="noopener noreferrer">r</a>'


def test_text_is_escaped_and_tags_closed():
    assert sanitize_html("<p>1 < 2 & 3") == "<p>1 &lt; 2 &amp; 3</p>"


def test_image_url_schemes():
    assert is_safe_image_url("https://x/img.png")
    assert is_safe_image_url("data:image/png;base64,AAAA")
    assert not is_safe_image_url("javascript:alert(1)")
