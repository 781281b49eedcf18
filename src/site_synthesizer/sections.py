"""Markup builders for the deterministic page template.

Every builder is a pure function of the palette (the hero also takes the
prompt) and returns a self-contained ``<section>`` fragment, so fragments can
be reordered or omitted without affecting each other.
"""

from __future__ import annotations

import html
from typing import Callable, Mapping

from .models.site import ColorPalette, SectionId

HERO_TITLE_MAX_CHARS = 60
ELLIPSIS = "..."

SectionBuilder = Callable[[ColorPalette, str], str]


def _gradient(colors: ColorPalette) -> str:
    return f"linear-gradient(135deg, {colors.primary} 0%, {colors.secondary} 100%)"


def hero_title(prompt: str) -> str:
    title = prompt.strip()
    if len(title) > HERO_TITLE_MAX_CHARS:
        title = title[:HERO_TITLE_MAX_CHARS] + ELLIPSIS
    return html.escape(title)


def build_header(colors: ColorPalette, brand: str) -> str:
    return f"""
    <header class="bg-white shadow-sm sticky top-0 z-50 backdrop-blur-lg bg-white/90">
        <nav class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 py-4">
            <div class="flex justify-between items-center">
                <div class="flex items-center gap-3">
                    <div class="w-10 h-10 rounded-xl flex items-center justify-center" style="background: {_gradient(colors)};">
                        <svg class="w-6 h-6 text-white" fill="none" stroke="currentColor" viewBox="0 0 24 24">
                            <path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="M13 10V3L4 14h7v7l9-11h-7z"></path>
                        </svg>
                    </div>
                    <span class="text-2xl font-bold" style="color: {colors.primary}">{html.escape(brand)}</span>
                </div>
                <div class="hidden md:flex space-x-8">
                    <a href="#home" class="text-gray-700 hover:text-gray-900 transition">Home</a>
                    <a href="#about" class="text-gray-700 hover:text-gray-900 transition">About</a>
                    <a href="#services" class="text-gray-700 hover:text-gray-900 transition">Services</a>
                    <a href="#contact" class="text-gray-700 hover:text-gray-900 transition">Contact</a>
                </div>
                <button class="px-6 py-2.5 rounded-lg text-white font-medium hover:shadow-lg transition-all" style="background: {colors.primary}">
                    Get Started
                </button>
            </div>
        </nav>
    </header>"""


def build_hero(colors: ColorPalette, prompt: str = "") -> str:
    return f"""
    <section id="home" class="relative min-h-screen flex items-center justify-center bg-gradient-to-br from-gray-50 to-gray-100 overflow-hidden">
        <div class="absolute inset-0 opacity-10">
            <div class="absolute top-20 left-20 w-72 h-72 rounded-full" style="background: {colors.primary}; filter: blur(100px);"></div>
            <div class="absolute bottom-20 right-20 w-96 h-96 rounded-full" style="background: {colors.secondary}; filter: blur(100px);"></div>
        </div>
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8 py-20 relative z-10">
            <div class="text-center animate-fade-in-up">
                <h1 class="text-5xl md:text-7xl font-bold text-gray-900 mb-6 leading-tight">
                    {hero_title(prompt)}
                </h1>
                <p class="text-xl md:text-2xl text-gray-600 mb-10 max-w-3xl mx-auto">
                    Transform your digital presence with cutting-edge solutions designed for the modern web
                </p>
                <div class="flex flex-col sm:flex-row justify-center gap-4">
                    <button class="px-10 py-4 rounded-xl text-white text-lg font-semibold hover:shadow-2xl transition-all transform hover:-translate-y-1" style="background: {_gradient(colors)};">
                        Get Started Now
                    </button>
                    <button class="px-10 py-4 rounded-xl border-2 text-lg font-semibold hover:shadow-lg transition-all" style="border-color: {colors.primary}; color: {colors.primary}">
                        Watch Demo
                    </button>
                </div>
            </div>
        </div>
    </section>"""


ABOUT_STATS = (
    ("500+", "Projects Completed"),
    ("98%", "Client Satisfaction"),
    ("50+", "Team Members"),
    ("24/7", "Support Available"),
)


def build_about(colors: ColorPalette, prompt: str = "") -> str:
    stats = "".join(
        f"""
                    <div class="bg-gray-50 p-6 rounded-xl">
                        <h3 class="text-4xl font-bold mb-2" style="color: {colors.primary if i % 2 == 0 else colors.secondary}">{value}</h3>
                        <p class="text-gray-600">{label}</p>
                    </div>"""
        for i, (value, label) in enumerate(ABOUT_STATS)
    )
    return f"""
    <section id="about" class="py-20 bg-white">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="grid md:grid-cols-2 gap-12 items-center">
                <div>
                    <h2 class="text-4xl md:text-5xl font-bold mb-6">About Our Mission</h2>
                    <p class="text-lg text-gray-600 mb-4">
                        We're dedicated to delivering exceptional experiences that push the boundaries of what's possible on the web.
                    </p>
                    <p class="text-lg text-gray-600 mb-6">
                        Our team combines creativity with technical expertise to craft solutions that not only meet but exceed expectations.
                    </p>
                    <button class="px-8 py-3 rounded-lg text-white font-medium" style="background: {colors.primary}">
                        Learn More
                    </button>
                </div>
                <div class="grid grid-cols-2 gap-4">{stats}
                </div>
            </div>
        </div>
    </section>"""


FEATURE_CARDS = (
    ("⚡", "Lightning Fast", "Optimized performance for blazing fast load times"),
    ("🎨", "Beautiful Design", "Carefully crafted interfaces that users love"),
    ("🔒", "Secure & Safe", "Enterprise-grade security for your peace of mind"),
    ("📱", "Fully Responsive", "Perfect experience on any device or screen size"),
    ("🚀", "Easy to Use", "Intuitive interface designed for everyone"),
    ("💡", "Innovative", "Cutting-edge technology and modern solutions"),
)


def build_features(colors: ColorPalette, prompt: str = "") -> str:
    cards = "".join(
        f"""
                <div class="bg-white p-8 rounded-2xl shadow-sm hover:shadow-xl transition-all transform hover:-translate-y-2 border border-gray-100">
                    <div class="text-5xl mb-4">{icon}</div>
                    <h3 class="text-2xl font-bold mb-3" style="color: {colors.primary}">{html.escape(title)}</h3>
                    <p class="text-gray-600">{desc}</p>
                </div>"""
        for icon, title, desc in FEATURE_CARDS
    )
    return f"""
    <section id="services" class="py-20 bg-gray-50">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="text-center mb-16">
                <h2 class="text-4xl md:text-5xl font-bold mb-4">Powerful Features</h2>
                <p class="text-xl text-gray-600 max-w-2xl mx-auto">
                    Everything you need to build amazing experiences
                </p>
            </div>
            <div class="grid md:grid-cols-2 lg:grid-cols-3 gap-8">{cards}
            </div>
        </div>
    </section>"""


PRICING_PLANS = (
    ("Starter", "Perfect for individuals", "$29", ("5 Projects", "Basic Support", "10GB Storage"), "Get Started"),
    (
        "Pro",
        "For growing businesses",
        "$99",
        ("Unlimited Projects", "Priority Support", "100GB Storage", "Advanced Analytics"),
        "Get Started",
    ),
    (
        "Enterprise",
        "For large organizations",
        "$299",
        ("Everything in Pro", "24/7 Support", "Unlimited Storage", "Custom Integration"),
        "Contact Sales",
    ),
)
HIGHLIGHTED_PLAN = "Pro"


def _pricing_card(colors: ColorPalette, name: str, blurb: str, price: str, perks, cta: str) -> str:
    items = "".join(
        f"""
                        <li class="flex items-center gap-2">✓ {perk}</li>""" for perk in perks
    )
    if name == HIGHLIGHTED_PLAN:
        wrapper = f'<div class="bg-white p-8 rounded-2xl border-2 shadow-xl transform scale-105" style="border-color: {colors.primary}">'
        badge = f"""
                    <div class="inline-block px-3 py-1 rounded-full text-sm font-semibold text-white mb-4" style="background: {colors.primary}">
                        Popular
                    </div>"""
        button_style = f"background: {colors.primary}"
        button_class = "w-full px-6 py-3 rounded-lg text-white font-medium"
    else:
        wrapper = '<div class="bg-gray-50 p-8 rounded-2xl">'
        badge = ""
        button_style = f"border-color: {colors.primary}; color: {colors.primary}"
        button_class = "w-full px-6 py-3 rounded-lg border-2 font-medium"
    return f"""
                {wrapper}{badge}
                    <h3 class="text-2xl font-bold mb-2">{name}</h3>
                    <p class="text-gray-600 mb-6">{blurb}</p>
                    <div class="mb-6">
                        <span class="text-5xl font-bold">{price}</span>
                        <span class="text-gray-600">/month</span>
                    </div>
                    <ul class="space-y-3 mb-8">{items}
                    </ul>
                    <button class="{button_class}" style="{button_style}">
                        {cta}
                    </button>
                </div>"""


def build_pricing(colors: ColorPalette, prompt: str = "") -> str:
    cards = "".join(_pricing_card(colors, *plan) for plan in PRICING_PLANS)
    return f"""
    <section id="pricing" class="py-20 bg-white">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="text-center mb-16">
                <h2 class="text-4xl md:text-5xl font-bold mb-4">Simple Pricing</h2>
                <p class="text-xl text-gray-600">Choose the perfect plan for your needs</p>
            </div>
            <div class="grid md:grid-cols-3 gap-8">{cards}
            </div>
        </div>
    </section>"""


TEAM_MEMBERS = (
    ("Alex Johnson", "CEO & Founder", "👨‍💼"),
    ("Sarah Chen", "Lead Designer", "👩‍🎨"),
    ("Mike Davis", "CTO", "👨‍💻"),
    ("Emily Brown", "Marketing Director", "👩‍💼"),
)


def build_team(colors: ColorPalette, prompt: str = "") -> str:
    members = "".join(
        f"""
                <div class="bg-white p-6 rounded-2xl text-center hover:shadow-xl transition-all">
                    <div class="text-7xl mb-4">{avatar}</div>
                    <h3 class="text-xl font-bold mb-1">{name}</h3>
                    <p style="color: {colors.secondary}">{html.escape(role)}</p>
                </div>"""
        for name, role, avatar in TEAM_MEMBERS
    )
    return f"""
    <section id="team" class="py-20 bg-gray-50">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="text-center mb-16">
                <h2 class="text-4xl md:text-5xl font-bold mb-4">Meet Our Team</h2>
                <p class="text-xl text-gray-600">The talented people behind our success</p>
            </div>
            <div class="grid md:grid-cols-2 lg:grid-cols-4 gap-8">{members}
            </div>
        </div>
    </section>"""


GALLERY_TILES = 6


def build_gallery(colors: ColorPalette, prompt: str = "") -> str:
    tiles = []
    for i in range(1, GALLERY_TILES + 1):
        # 8-digit hex: the trailing pair is the alpha channel
        first, second = ("40", "20") if i % 2 == 0 else ("20", "40")
        tiles.append(
            f"""
                <div class="aspect-video rounded-2xl overflow-hidden hover:shadow-2xl transition-all transform hover:scale-105 cursor-pointer" style="background: linear-gradient(135deg, {colors.primary}{first} 0%, {colors.secondary}{second} 100%);">
                    <div class="w-full h-full flex items-center justify-center">
                        <div class="text-center text-white p-6">
                            <h3 class="text-2xl font-bold mb-2">Project {i}</h3>
                            <p>Click to view details</p>
                        </div>
                    </div>
                </div>"""
        )
    tile_markup = "".join(tiles)
    return f"""
    <section id="gallery" class="py-20 bg-white">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="text-center mb-16">
                <h2 class="text-4xl md:text-5xl font-bold mb-4">Our Work</h2>
                <p class="text-xl text-gray-600">A showcase of our best projects</p>
            </div>
            <div class="grid md:grid-cols-2 lg:grid-cols-3 gap-6">{tile_markup}
            </div>
        </div>
    </section>"""


TESTIMONIALS = (
    ("John Smith", "Tech Corp", "Absolutely amazing service! They transformed our vision into reality."),
    ("Lisa Wang", "StartupXYZ", "Professional, creative, and delivered beyond our expectations."),
    ("David Miller", "Enterprise Inc", "The best team we've worked with. Highly recommended!"),
)


def build_testimonials(colors: ColorPalette, prompt: str = "") -> str:
    quotes = "".join(
        f"""
                <div class="bg-white p-8 rounded-2xl shadow-sm">
                    <div class="text-4xl mb-4" style="color: {colors.accent}">★★★★★</div>
                    <p class="text-gray-700 mb-6 text-lg">&ldquo;{html.escape(text)}&rdquo;</p>
                    <div>
                        <p class="font-bold">{name}</p>
                        <p class="text-gray-600">{company}</p>
                    </div>
                </div>"""
        for name, company, text in TESTIMONIALS
    )
    return f"""
    <section id="testimonials" class="py-20 bg-gray-50">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="text-center mb-16">
                <h2 class="text-4xl md:text-5xl font-bold mb-4">What Clients Say</h2>
                <p class="text-xl text-gray-600">Don't just take our word for it</p>
            </div>
            <div class="grid md:grid-cols-3 gap-8">{quotes}
            </div>
        </div>
    </section>"""


def build_contact(colors: ColorPalette, prompt: str = "") -> str:
    field_style = f'style="outline-color: {colors.primary}"'
    field_class = "w-full px-4 py-3 rounded-lg border border-gray-300 focus:ring-2 focus:border-transparent"
    return f"""
    <section id="contact" class="py-20 bg-white">
        <div class="max-w-4xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="text-center mb-12">
                <h2 class="text-4xl md:text-5xl font-bold mb-4">Get In Touch</h2>
                <p class="text-xl text-gray-600">We'd love to hear from you</p>
            </div>
            <div class="bg-gray-50 p-8 md:p-12 rounded-2xl">
                <form class="space-y-6">
                    <div class="grid md:grid-cols-2 gap-6">
                        <div>
                            <label class="block text-sm font-medium mb-2">Name</label>
                            <input type="text" class="{field_class}" {field_style} placeholder="Your name">
                        </div>
                        <div>
                            <label class="block text-sm font-medium mb-2">Email</label>
                            <input type="email" class="{field_class}" {field_style} placeholder="your@email.com">
                        </div>
                    </div>
                    <div>
                        <label class="block text-sm font-medium mb-2">Message</label>
                        <textarea rows="5" class="{field_class}" {field_style} placeholder="Tell us about your project..."></textarea>
                    </div>
                    <button type="submit" class="w-full px-8 py-4 rounded-lg text-white text-lg font-semibold hover:shadow-lg transition-all" style="background: {colors.primary}">
                        Send Message
                    </button>
                </form>
            </div>
        </div>
    </section>"""


FAQ_ENTRIES = (
    ("How long does it take?", "Most projects are completed within 2-4 weeks depending on complexity."),
    ("What's included?", "Full design, development, testing, and deployment with ongoing support."),
    ("Can I request changes?", "Absolutely! We offer unlimited revisions until you're 100% satisfied."),
    ("Do you offer support?", "Yes, we provide 24/7 support for all our clients."),
)


def build_faq(colors: ColorPalette, prompt: str = "") -> str:
    entries = "".join(
        f"""
                <details class="bg-white p-6 rounded-xl shadow-sm cursor-pointer hover:shadow-md transition-all">
                    <summary class="font-bold text-lg list-none flex justify-between items-center">
                        {html.escape(question)}
                        <span class="text-2xl" style="color: {colors.primary}">+</span>
                    </summary>
                    <p class="mt-4 text-gray-600">{html.escape(answer)}</p>
                </details>"""
        for question, answer in FAQ_ENTRIES
    )
    return f"""
    <section id="faq" class="py-20 bg-gray-50">
        <div class="max-w-4xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="text-center mb-12">
                <h2 class="text-4xl md:text-5xl font-bold mb-4">FAQ</h2>
                <p class="text-xl text-gray-600">Frequently Asked Questions</p>
            </div>
            <div class="space-y-4">{entries}
            </div>
        </div>
    </section>"""


FOOTER_COLUMNS = (
    ("Product", ("Features", "Pricing", "FAQ", "Support")),
    ("Company", ("About", "Blog", "Careers", "Press")),
    ("Legal", ("Privacy", "Terms", "Security", "Contact")),
)


def _footer_column(heading: str, links) -> str:
    items = "".join(
        f"""
                        <li><a href="#" class="hover:text-white transition">{link}</a></li>"""
        for link in links
    )
    return f"""
                <div>
                    <h4 class="font-bold mb-4 text-lg">{heading}</h4>
                    <ul class="space-y-2 text-gray-400">{items}
                    </ul>
                </div>"""


def build_footer(colors: ColorPalette, brand: str) -> str:
    columns = "".join(_footer_column(heading, links) for heading, links in FOOTER_COLUMNS)
    return f"""
    <footer class="bg-gray-900 text-white py-16">
        <div class="max-w-7xl mx-auto px-4 sm:px-6 lg:px-8">
            <div class="grid md:grid-cols-4 gap-8 mb-8">
                <div>
                    <h3 class="text-2xl font-bold mb-4" style="color: {colors.primary}">
                        {html.escape(brand)}
                    </h3>
                    <p class="text-gray-400 mb-4">Building the future, one website at a time.</p>
                    <div class="flex gap-4">
                        <a href="#" class="w-10 h-10 rounded-full flex items-center justify-center bg-gray-800 hover:bg-gray-700 transition"><span>f</span></a>
                        <a href="#" class="w-10 h-10 rounded-full flex items-center justify-center bg-gray-800 hover:bg-gray-700 transition"><span>𝕏</span></a>
                        <a href="#" class="w-10 h-10 rounded-full flex items-center justify-center bg-gray-800 hover:bg-gray-700 transition"><span>in</span></a>
                    </div>
                </div>{columns}
            </div>
            <div class="border-t border-gray-800 pt-8 text-center text-gray-400">
                <p>&copy; Generated with Site Synthesizer. All rights reserved.</p>
            </div>
        </div>
    </footer>"""


SECTION_BUILDERS: Mapping[SectionId, SectionBuilder] = {
    SectionId.hero: build_hero,
    SectionId.about: build_about,
    SectionId.features: build_features,
    SectionId.pricing: build_pricing,
    SectionId.team: build_team,
    SectionId.gallery: build_gallery,
    SectionId.testimonials: build_testimonials,
    SectionId.contact: build_contact,
    SectionId.faq: build_faq,
}


__all__ = [
    "HERO_TITLE_MAX_CHARS",
    "SECTION_BUILDERS",
    "SectionBuilder",
    "build_footer",
    "build_header",
    "hero_title",
]
