"""Curated subject name variants seen in Sumqayıt Dövlət Universiteti timetables.

Each entry lists the spellings that appear in group schedules. Aliases are
already in normalized form (see unimaz.utils.normalizers).
"""

from typing import Any, Dict, List

GLOBAL_SUBJECT_MAPPINGS: List[Dict[str, Any]] = [
    # Computer engineering
    {
        "canonical_name": "Kompüter mühəndisliyinin əsasları",
        "variants": [
            "Kompüter mühəndisliyinin əsasları",
            "Komp. müh. əsas.",
            "Kompüter mühəndisliyinin əsasları (mühazirə)",
            "Kompüter mühəndisliyinin əsasları (məşğələ)",
            "Kompüter mühəndisliyinin əsasları (lab.)",
            "Komp. müh. əsas. (müh)",
            "Komp. müh. əsas. (məş)",
            "Komp. müh. əsas. (lab)",
        ],
        "aliases": ["komp mühazirə əsas", "kompüter mühəndisliyinin əsasları"],
    },
    # Programming
    {
        "canonical_name": "Proqramlaşdırmanın əsasları",
        "variants": [
            "Proqramlaşdırmanın əsasları",
            "Proqramlaş. əsas.",
            "Proqramlaşdırmanın əsasları (mühazirə)",
            "Proqramlaşdırmanın əsasları (məşğələ)",
            "Proqramlaşdırmanın əsasları (lab.)",
            "Proqramlaş. əsas. (müh)",
            "Proqramlaş. əsas. (məş)",
            "Proqramlaş. əsas. (lab)",
        ],
        "aliases": ["proqramlaş əsas", "proqramlaşdırmanın əsasları"],
    },
    # Linear algebra
    {
        "canonical_name": "Xətti cəbr və analitik həndəsə",
        "variants": [
            "Xətti cəbr və analitik həndəsə",
            "Xətti cəbr və an. hən.",
            "Xətti cəbr və analitik həndəsə (mühazirə)",
            "Xətti cəbr və analitik həndəsə (məşğələ)",
            "Xətti cəbr və an. hən. (müh)",
            "Xətti cəbr və an. hən. (məş)",
        ],
        "aliases": ["xətti cəbr və an hən", "xətti cəbr və analitik həndəsə"],
    },
    # Circuit theory
    {
        "canonical_name": "Dövrələr nəzəriyyəsi",
        "variants": [
            "Dövrələr nəzəriyyəsi",
            "Dövrələr nəzərioyyəsi",
            "Döv.nəz.",
            "Dövrələr nəzəriyyəsi (mühazirə)",
            "Dövrələr nəzəriyyəsi (məşğələ)",
            "Dövrələr nəzəriyyəsi (lab.)",
            "Döv. nəz. (müh)",
            "Döv. nəz. (məş)",
        ],
        "aliases": ["döv nəz", "dövrələr nəzərioyyəsi", "dövrələr nəzəriyyəsi"],
    },
    # Azerbaijani language
    {
        "canonical_name": "Azərbaycan dilində işgüzar və akademik kommunikasiya",
        "variants": [
            "Azərbaycan dilində işgüzar və akademik kommunikasiya",
            "Az. dil. işg. və ak. kom.",
            "Azərbaycan dilində işgüzar və akademik kommunikasiya (mühazirə)",
            "Azərbaycan dilində işgüzar və akademik kommunikasiya (məşğələ)",
            "Az. dil. işg. və ak. kom. (müh)",
            "Az. dil. işg. və ak. kom. (məş)",
        ],
        "aliases": [
            "az dil işg və ak kom",
            "azərbaycan dilində işgüzar və akademik kommunikasiya",
        ],
    },
    # Foreign language
    {
        "canonical_name": "Xarici dil işgüzar və akademik kommunikasiya",
        "variants": [
            "Xarici dil işgüzar və akademik kommunikasiya",
            "X/d işgüzar. və akad. kom.",
            "Xarici dil işgüzar və akademik kommunikasiya (mühazirə)",
            "Xarici dil işgüzar və akademik kommunikasiya (məşğələ)",
            "X/d işgüzar. və akad. kom. (müh)",
            "X/d işgüzar. və akad. kom. (məş)",
        ],
        "aliases": [
            "x/d işgüzar və akad kom",
            "xarici dil işgüzar və akademik kommunikasiya",
        ],
    },
    # Measurement technology
    {
        "canonical_name": "Ölçmə texnikasının əsasları",
        "variants": [
            "Ölçmə texnikasının əsasları",
            "Ölçmə texnika. əsas.",
            "Ölçmə texnikasının əsasları (mühazirə)",
            "Ölçmə texnikasının əsasları (məşğələ)",
            "Ölçmə texnikasının əsasları (lab.)",
            "Ölçmə texnika. əsas. (müh)",
            "Ölçmə texnika. əsas. (məş)",
            "Ölçmə texnika. əsas. (lab)",
        ],
        "aliases": ["ölçmə texnika əsas", "ölçmə texnikasının əsasları"],
    },
    # Data structures
    {
        "canonical_name": "Verilənlər strukturu və alqoritmlər",
        "variants": [
            "Verilənlər strukturu və alqoritmlər",
            "Verilən. struk. və alqoritm.",
            "Verilən. strukturu və alqor.",
            "Verilənlər strukturu və alqoritmlər (mühazirə)",
            "Verilənlər strukturu və alqoritmlər (məşğələ)",
            "Verilənlər strukturu və alqoritmlər (lab.)",
        ],
        "aliases": [
            "verilən struk və alqoritm",
            "verilən strukturu və alqor",
            "verilənlər strukturu və alqoritmlər",
        ],
    },
    # Information technology
    {
        "canonical_name": "İnformasiya texnologiyaları və proqramlaşdırma",
        "variants": [
            "İnformasiya texnologiyaları və proqramlaşdırma",
            "İst. tex. və pr.",
            "İnformasiya texnologiyalarının əsasları",
            "İnformasiya texnolog. əsas.",
            "İnformasiya texnologiyaları və proqramlaşdırma (mühazirə)",
            "İnformasiya texnologiyaları və proqramlaşdırma (məşğələ)",
        ],
        "aliases": [
            "ist tex və pr",
            "informasiya texnologiyaları və proqramlaşdırma",
            "informasiya texnolog əsas",
        ],
    },
    # Transportation
    {
        "canonical_name": "Nəqliyyat növü konstruksiya xüsusiyyətləri",
        "variants": [
            "Nəqliyyat növü konstruksiya xüsusiyyətləri",
            "Nəql. növ. konstr. xüs.",
            "Nəqliyyat növü konstruksiya xüsusiyyətləri (mühazirə)",
            "Nəqliyyat növü konstruksiya xüsusiyyətləri (məşğələ)",
        ],
        "aliases": [
            "nəql növ konstr xüs",
            "nəqliyyat növü konstruksiya xüsusiyyətləri",
        ],
    },
    # Automation
    {
        "canonical_name": "Avtomatlaşdırma texniki vasitələri",
        "variants": [
            "Avtomatlaşdırma texniki vasitələri",
            "Avtomatlaş. texniki vasitələ.",
            "Avtomatlaşdırma texniki vasitələri (mühazirə)",
            "Avtomatlaşdırma texniki vasitələri (məşğələ)",
            "Avtomatlaşdırma texniki vasitələri (lab.)",
            "Avtomatlaş. texniki vasitələ. (müh)",
            "Avtomatlaş. texniki vasitələ. (məş)",
            "Avtomatlaş. texniki vasitələ. (lab)",
        ],
        "aliases": [
            "avtomatlaş texniki vasitələ",
            "avtomatlaşdırma texniki vasitələri",
        ],
    },
    # Computer architecture
    {
        "canonical_name": "Kompüter arxitekturası",
        "variants": [
            "Kompüter arxitekturası",
            # letter-spaced spelling used by group 672
            "K o m p ü t e r   a r x i t e k t u r a s ı",
            "Kompüter arxitekturası (mühazirə)",
            "Kompüter arxitekturası (məşğələ)",
            "Kompüter arxitekturası (lab.)",
        ],
        "aliases": ["kompüter arxitekturası"],
    },
    # Multimedia technology
    {
        "canonical_name": "Multimediya texnologiyaları",
        "variants": [
            "Multimediya texnologiyaları",
            "Multimediya texnolog.",
            "Multimediya texnologiyaları (mühazirə)",
            "Multimediya texnologiyaları (məşğələ)",
            "Multimediya texnologiyaları (lab.)",
        ],
        "aliases": ["multimediya texnolog", "multimediya texnologiyaları"],
    },
    # Electronics
    {
        "canonical_name": "Elektronikanın əsasları",
        "variants": [
            "Elektronikanın əsasları",
            "Elektronika əsas.",
            "Elektronikanın əsasları (mühazirə)",
            "Elektronikanın əsasları (məşğələ)",
            "Elektronikanın əsasları (lab.)",
        ],
        "aliases": ["elektronika əsas", "elektronikanın əsasları"],
    },
    # Operating systems
    {
        "canonical_name": "Əməliyyat sistemləri",
        "variants": [
            "Əməliyyat sistemləri",
            "Əməliyyat sist.",
            "Əməliyyat sistemləri (mühazirə)",
            "Əməliyyat sistemləri (məşğələ)",
            "Əməliyyat sistemləri (lab.)",
        ],
        "aliases": ["əməliyyat sist", "əməliyyat sistemləri"],
    },
    # Differential equations
    {
        "canonical_name": "Diferensial tənliklər",
        "variants": [
            "Diferensial tənliklər",
            "D i f e r e n s i a l   t ə n l i k l ə r",
            "Diferensial tənliklər (mühazirə)",
            "Diferensial tənliklər (məşğələ)",
        ],
        "aliases": ["diferensial tənliklər"],
    },
    # Philosophy
    {
        "canonical_name": "Fəlsəfə",
        "variants": ["Fəlsəfə", "Fəlsəfə (mühazirə)", "Fəlsəfə (məşğələ)"],
        "aliases": ["fəlsəfə"],
    },
    # Applied mathematics
    {
        "canonical_name": "Tətbiqi riyaziyyat",
        "variants": [
            "Tətbiqi riyaziyyat",
            "Tətbiqi riyaz.",
            "Tətbiqi riyaziyyat (mühazirə)",
            "Tətbiqi riyaziyyat (məşğələ)",
        ],
        "aliases": ["tətbiqi riyaz", "tətbiqi riyaziyyat"],
    },
    # Chemistry
    {
        "canonical_name": "Kimya",
        "variants": ["Kimya", "Kimya (mühazirə)", "Kimya (məşğələ)", "Kimya (lab.)"],
        "aliases": ["kimya"],
    },
    # Azerbaijani history
    {
        "canonical_name": "Azərbaycan tarixi",
        "variants": [
            "Azərbaycan tarixi",
            "Az. tarixi",
            "Azərbaycan tarixi (mühazirə)",
            "Azərbaycan tarixi (məşğələ)",
        ],
        "aliases": ["az tarixi", "azərbaycan tarixi"],
    },
]

UNIVERSITY_CONFIGS: List[Dict[str, Any]] = [
    {
        "university_id": 11,
        "university_name": "Sumqayıt Dövlət Universiteti",
        "subject_mappings": GLOBAL_SUBJECT_MAPPINGS,
    },
]
