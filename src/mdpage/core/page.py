"""Page shell: wraps rendered blocks in a self-contained React page component.

The template uses `[[ ]]` / `[% %]` delimiters so JSX `{{ }}` passes through
untouched. Nothing is HTML-autoescaped; user text is escaped explicitly:
`jsx_text` (entities) where it lands in JSX text, `jsx` for attribute
values, and `tojson` for values that land in JS string literals.
"""

import json
from typing import Optional

from jinja2 import Environment

from mdpage.core.models import DocumentMeta, HeadingEntry, ParseResult
from mdpage.core.render import render_blocks
from mdpage.core.utils.escape import escape_jsx, escape_jsx_text
from mdpage.styles import (
    DARK_VARIANTS, STYLE_LABELS, STYLES, StyleName, resolve_style,
)


TOC_MIN_HEADINGS = 3

MERMAID_SCRIPT = "https://unpkg.com/beautiful-mermaid/dist/beautiful-mermaid.browser.global.js"
PRISM_BASE = "https://unpkg.com/prismjs@1"


_ENV = Environment(
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    variable_start_string="[[",
    variable_end_string="]]",
    block_start_string="[%",
    block_end_string="%]",
    comment_start_string="[#",
    comment_end_string="#]",
)
_ENV.filters["jsx"] = escape_jsx
_ENV.filters["jsx_text"] = escape_jsx_text


MERMAID_EFFECT = _ENV.from_string("""
  useEffect(() => {
    const script = document.createElement("script");
    script.src = [[ script_url|tojson ]];
    script.onload = async () => {
      const { renderMermaid } = (window as any).beautifulMermaid;
      const diagrams = document.querySelectorAll(".mermaid-diagram");
      for (const el of diagrams) {
        const src = el.getAttribute("data-diagram");
        if (!src) continue;
        try {
          const svg = await renderMermaid(src, {
            bg: [[ s.bg_color|tojson ]],
            fg: [[ s.text_color|tojson ]],
            accent: [[ s.link_color|tojson ]],
            muted: [[ s.muted_color|tojson ]],
            border: [[ s.border_color|tojson ]],
            font: [[ s.primary_body_font|tojson ]],
          });
          el.innerHTML = svg;
          const svgEl = el.querySelector("svg");
          if (svgEl) {
            svgEl.style.maxWidth = "100%";
            svgEl.style.height = "auto";
          }
        } catch (e) {
          const pre = document.createElement("pre");
          pre.style.color = "var(--muted-color)";
          pre.style.fontSize = "0.85rem";
          pre.textContent = src;
          el.replaceChildren(pre);
        }
      }
    };
    document.head.appendChild(script);
  }, []);""")


PRISM_EFFECT = _ENV.from_string("""
  useEffect(() => {
    const link = document.createElement("link");
    link.rel = "stylesheet";
    link.href = [[ (base ~ "/themes/prism" ~ ("-tomorrow" if dark else "") ~ ".min.css")|tojson ]];
    document.head.appendChild(link);
    const script = document.createElement("script");
    script.src = [[ (base ~ "/prism.min.js")|tojson ]];
    script.onload = () => {
      const autoloader = document.createElement("script");
      autoloader.src = [[ (base ~ "/plugins/autoloader/prism-autoloader.min.js")|tojson ]];
      autoloader.onload = () => {
        if ((window as any).Prism) (window as any).Prism.highlightAll();
      };
      document.head.appendChild(autoloader);
    };
    document.head.appendChild(script);
  }, []);""")


TOC_LINK = _ENV.from_string(
    '<a href="#[[ h.id ]]" style={{ display: "block", padding: "0.3rem 0", paddingLeft: "[[ indent ]]px", '
    'color: "var(--muted-color)", textDecoration: "none", fontSize: "[[ size ]]", fontWeight: [[ weight ]], '
    'transition: "color 0.15s" }} '
    'onMouseEnter={(e) => e.currentTarget.style.color = "var(--link-color)"} '
    'onMouseLeave={(e) => e.currentTarget.style.color = "var(--muted-color)"}>[[ h.text|jsx_text ]]</a>'
)


PAGE_TEMPLATE = _ENV.from_string("""import { useState, useEffect, useRef } from "react";

export default function PublishedPage() {
  const [mounted, setMounted] = useState(false);
  const [darkMode, setDarkMode] = useState(false);
  const [showToc, setShowToc] = useState(false);
  const [showStylePicker, setShowStylePicker] = useState(false);
  const stylePickerRef = useRef<HTMLDivElement | null>(null);
  const [currentStyle, setCurrentStyle] = useState([[ style_name|tojson ]]);
  const [progress, setProgress] = useState(0);

  const styles = [[ styles_json ]];

  const darkVariants = [[ dark_json ]];

  const styleNames: Record<string, string> = [[ labels_json ]];

  const s = styles[currentStyle];
  const d = darkVariants[currentStyle];

  useEffect(() => {
    setMounted(true);
    const savedStyle = localStorage.getItem("mdpage-style");
    if (savedStyle && styles[savedStyle]) {
      setCurrentStyle(savedStyle);
    }
    const mq = window.matchMedia("(prefers-color-scheme: dark)");
    setDarkMode(mq.matches);
    const handler = (e: MediaQueryListEvent) => setDarkMode(e.matches);
    mq.addEventListener("change", handler);
    return () => mq.removeEventListener("change", handler);
  }, []);

  useEffect(() => {
    localStorage.setItem("mdpage-style", currentStyle);
  }, [currentStyle]);

  useEffect(() => {
    if (!showStylePicker) return;
    const handleClickOutside = (event: MouseEvent) => {
      if (!stylePickerRef.current) return;
      if (!stylePickerRef.current.contains(event.target as Node)) {
        setShowStylePicker(false);
      }
    };
    document.addEventListener("mousedown", handleClickOutside);
    return () => document.removeEventListener("mousedown", handleClickOutside);
  }, [showStylePicker]);

  useEffect(() => {
    const onScroll = () => {
      const h = document.documentElement.scrollHeight - window.innerHeight;
      setProgress(h > 0 ? (window.scrollY / h) * 100 : 0);
    };
    window.addEventListener("scroll", onScroll, { passive: true });
    return () => window.removeEventListener("scroll", onScroll);
  }, []);

  useEffect(() => {
    const id = "style-font-" + currentStyle;
    if (!document.getElementById(id)) {
      const link = document.createElement("link");
      link.id = id;
      link.rel = "stylesheet";
      link.href = s.fontImport;
      document.head.appendChild(link);
    }
  }, [currentStyle, s.fontImport]);
[[ mermaid_effect ]]
[[ prism_effect ]]

  return (
    <>
      <style>{`
        :root {
          --heading-font: ${s.headingFont};
          --body-font: ${s.bodyFont};
          --bg-color: ${s.bgColor};
          --text-color: ${s.textColor};
          --accent-color: ${s.accentColor};
          --muted-color: ${s.mutedColor};
          --surface-color: ${s.surfaceColor};
          --border-color: ${s.borderColor};
          --link-color: ${s.linkColor};
          --code-font: ${s.codeFont};
          --code-bg: ${s.codeBg};
          --blockquote-border: ${s.blockquoteBorder};
          --blockquote-bg: ${s.blockquoteBg};
        }
        .dark-mode {
          --bg-color: ${d.bg};
          --text-color: ${d.text};
          --accent-color: ${d.accent};
          --muted-color: ${d.muted};
          --surface-color: ${d.surface};
          --border-color: ${d.border};
          --link-color: ${d.link};
          --code-bg: ${d.codeBg};
          --blockquote-border: ${d.bqBorder};
          --blockquote-bg: ${d.bqBg};
        }
        * { margin: 0; padding: 0; box-sizing: border-box; }
        ::selection { background: ${s.accentColor}22; }
        @keyframes fadeUp {
          from { opacity: 0; transform: translateY(16px); }
          to { opacity: 1; transform: translateY(0); }
        }
        @media print {
          .no-print { display: none !important; }
          body { background: white !important; color: black !important; }
          article { max-width: 100% !important; padding: 0 !important; }
          a { color: inherit !important; text-decoration: underline !important; }
          a::after { content: " (" attr(href) ")"; font-size: 0.8em; }
          pre { white-space: pre-wrap !important; word-break: break-all; }
        }
      `}</style>

      <head>
        <meta property="og:title" content="[[ title|jsx|replace('"', "&quot;") ]]" />
        <meta property="og:description" content="[[ description|jsx|replace('"', "&quot;") ]]" />
        <meta property="og:type" content="article" />
        <meta name="twitter:card" content="summary" />
        <meta name="twitter:title" content="[[ title|jsx|replace('"', "&quot;") ]]" />
        <meta name="twitter:description" content="[[ description|jsx|replace('"', "&quot;") ]]" />
      </head>

      <div
        className={`min-h-screen ${darkMode ? "dark-mode" : ""}`}
        style={{
          backgroundColor: "var(--bg-color)",
          fontFamily: "var(--body-font)",
          color: "var(--text-color)",
          transition: "background-color 0.3s, color 0.3s",
        }}
      >
        <div
          className="no-print"
          style={{
            position: "fixed",
            top: 0,
            left: 0,
            width: `${progress}%`,
            height: "2px",
            backgroundColor: "var(--link-color)",
            zIndex: 100,
            transition: "width 0.1s linear",
          }}
        />

        <header
          className="pt-6 pb-6 px-6 no-print"
          style={{ maxWidth: s.maxWidth, margin: "0 auto", animation: mounted ? "fadeUp 0.6s ease-out both" : "none" }}
        >
          <nav className="flex items-center justify-between mb-12">
            <a
              href="/"
              className="text-sm tracking-wider uppercase no-underline transition-opacity hover:opacity-60"
              style={{ color: "var(--muted-color)", fontFamily: "var(--heading-font)", letterSpacing: "0.1em", fontWeight: 500, textDecoration: "none" }}
            >
              Home
            </a>
            <div className="flex items-center gap-3" style={{ position: "relative" }}>
[% if has_toc %]
              <button
                onClick={() => setShowToc(!showToc)}
                className="text-sm transition-opacity hover:opacity-60"
                style={{ color: "var(--muted-color)", background: "none", border: "none", cursor: "pointer", fontFamily: "var(--body-font)", padding: "0.25rem 0.5rem" }}
              >
                Contents
              </button>
[% endif %]
              <div ref={stylePickerRef} style={{ position: "relative" }}>
                <button
                  onClick={() => setShowStylePicker(!showStylePicker)}
                  className="text-sm transition-opacity hover:opacity-60"
                  style={{ color: "var(--muted-color)", background: "none", border: "1px solid var(--border-color)", cursor: "pointer", fontFamily: "var(--body-font)", padding: "0.35rem 0.7rem", borderRadius: "6px", fontSize: "0.8rem" }}
                  aria-label="Select style"
                >
                  Style: {styleNames[currentStyle]}
                </button>
                {showStylePicker && (
                  <div style={{ position: "absolute", top: "calc(100% + 6px)", right: 0, backgroundColor: "var(--surface-color)", border: "1px solid var(--border-color)", borderRadius: "8px", padding: "0.375rem", zIndex: 50, minWidth: "170px", boxShadow: "0 4px 12px rgba(0,0,0,0.1)" }}>
                    {Object.keys(styles).map((key) => (
                      <button
                        key={key}
                        onClick={() => { setCurrentStyle(key); setShowStylePicker(false); }}
                        style={{ display: "block", width: "100%", textAlign: "left", padding: "0.45rem 0.7rem", background: currentStyle === key ? "var(--border-color)" : "none", border: "none", borderRadius: "4px", cursor: "pointer", color: "var(--text-color)", fontFamily: "var(--body-font)", fontSize: "0.82rem", fontWeight: currentStyle === key ? 600 : 400 }}
                      >
                        {styleNames[key]}
                      </button>
                    ))}
                  </div>
                )}
              </div>
              <button
                onClick={() => setDarkMode(!darkMode)}
                style={{ background: "none", border: "none", cursor: "pointer", fontSize: "1.1rem", padding: "0.25rem", lineHeight: 1 }}
                aria-label="Toggle dark mode"
              >
                {darkMode ? "\\u2600\\uFE0F" : "\\uD83C\\uDF19"}
              </button>
            </div>
          </nav>
        </header>
[% if has_toc %]

        {showToc && (
          <div className="no-print" style={{ maxWidth: s.maxWidth, margin: "0 auto -2rem", padding: "0 1.5rem 2rem" }}>
            <div style={{ backgroundColor: "var(--surface-color)", borderRadius: "8px", padding: "1.25rem 1.5rem", border: "1px solid var(--border-color)" }}>
              <p style={{ fontSize: "0.75rem", textTransform: "uppercase", letterSpacing: "0.1em", color: "var(--muted-color)", marginBottom: "0.75rem", fontWeight: 600 }}>On this page</p>
              <nav style={{ display: "flex", flexDirection: "column" }}>
                [[ toc_links ]]
              </nav>
            </div>
          </div>
        )}
[% endif %]

        <div style={{ maxWidth: s.maxWidth, margin: "0 auto", padding: "0 1.5rem", animation: mounted ? "fadeUp 0.6s ease-out 0.1s both" : "none" }}>
          <h1
            className="font-bold leading-tight"
            style={{ fontFamily: "var(--heading-font)", fontSize: "clamp(2.25rem, 6vw, 3.25rem)", color: "var(--accent-color)", letterSpacing: "-0.025em", marginBottom: "[[ '1.1rem' if subtitle else '1.7rem' ]]", lineHeight: 1.15 }}
          >
            [[ title|jsx_text ]]
          </h1>
[% if subtitle %]
          <p className="text-lg mb-6" style={{ color: "var(--muted-color)", fontSize: "1.15rem", lineHeight: 1.62, fontFamily: "var(--body-font)", maxWidth: "60ch" }}>[[ subtitle|jsx_text ]]</p>
[% endif %]
          <div className="flex items-center gap-3 mb-10 text-sm" style={{ color: "var(--muted-color)" }}>
[% if author %]
            <span>[[ author|jsx_text ]]</span>
[% endif %]
[% if author and date %]
            <span style={{ opacity: 0.4 }}>&middot;</span>
[% endif %]
[% if date %]
            <time>[[ date|jsx_text ]]</time>
[% endif %]
[% if author or date %]
            <span style={{ opacity: 0.4 }}>&middot;</span>
[% endif %]
            <span>[[ reading_time ]]</span>
          </div>
          <hr className="border-none h-px" style={{ backgroundColor: "var(--border-color)", marginBottom: "2.5rem" }} />
        </div>

        <article style={{ maxWidth: s.maxWidth, margin: "0 auto", padding: "0 1.5rem 7rem", animation: mounted ? "fadeUp 0.6s ease-out 0.2s both" : "none" }}>
            [[ content ]]
        </article>

        <footer className="py-12 px-6 text-center" style={{ borderTop: "1px solid var(--border-color)", maxWidth: s.maxWidth, margin: "0 auto" }}>
          <p className="text-xs tracking-wider uppercase" style={{ color: "var(--muted-color)", letterSpacing: "0.15em" }}>
            Published with mdpage
          </p>
        </footer>
      </div>
    </>
  );
}
""")


def render_toc(headings: list[HeadingEntry]) -> str:
    """Contents links for the outline; empty unless there are enough headings."""
    if len(headings) < TOC_MIN_HEADINGS:
        return ""
    return "\n                ".join(
        TOC_LINK.render(
            h=h,
            indent=max(0, (h.level - 2) * 16),
            size="0.875rem" if h.level <= 2 else "0.8125rem",
            weight=500 if h.level <= 2 else 400,
        )
        for h in headings
    )


def _catalog_json(accent: Optional[str]) -> str:
    """All presets for the in-page style switcher, with the accent override applied to each."""
    return json.dumps({
        name.value: resolve_style(name.value, accent).model_dump(by_alias=True)
        for name in STYLES
    })


def render_page(
    parsed: ParseResult,
    meta: DocumentMeta,
    style_name: str = StyleName.editorial.value,
    accent: Optional[str] = None,
    ) -> str:
    """Render the full page module for a parsed document.

    Optional capability loaders (mermaid, Prism) are included only when the
    corresponding feature flag is set on `parsed`.
    """
    preset = resolve_style(style_name, accent)
    toc_links = render_toc(parsed.headings)

    mermaid_effect = ""
    if parsed.has_mermaid:
        mermaid_effect = MERMAID_EFFECT.render(script_url=MERMAID_SCRIPT, s=preset)
    prism_effect = ""
    if parsed.has_syntax_highlighting:
        prism_effect = PRISM_EFFECT.render(base=PRISM_BASE, dark=preset.is_dark)

    return PAGE_TEMPLATE.render(
        style_name=style_name,
        styles_json=_catalog_json(accent),
        dark_json=json.dumps({
            name.value: variant.model_dump(by_alias=True) for name, variant in DARK_VARIANTS.items()
        }),
        labels_json=json.dumps({name.value: label for name, label in STYLE_LABELS.items()}),
        mermaid_effect=mermaid_effect,
        prism_effect=prism_effect,
        has_toc=bool(toc_links),
        toc_links=toc_links,
        title=meta.title,
        subtitle=meta.subtitle,
        author=meta.author,
        date=meta.date,
        description=meta.subtitle or meta.description,
        reading_time=meta.reading_time,
        content=render_blocks(parsed.blocks),
    )
