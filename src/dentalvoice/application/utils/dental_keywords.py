"""
Multilingual dental keyword table and matcher.

One table maps each clinical concept to its surface forms per locale
(English, Hindi in Devanagari, Spanish). Adding a language means adding a
locale entry here; the classifier never lists keywords itself.
"""

from typing import Dict, Iterable, List, Tuple, Union

EN = "en"
HI = "hi"
ES = "es"

CONCEPT_KEYWORDS: Dict[str, Dict[str, List[str]]] = {
    # Diagnosis concepts
    "caries": {
        EN: ["caries", "carious", "cavity", "cavities", "decay", "decayed"],
        HI: ["कैविटी", "दंत क्षय", "सड़न", "कीड़ा"],
        ES: ["caries", "cariado", "picadura"],
    },
    "deep": {
        EN: ["deep"],
        HI: ["गहरी", "गहरा"],
        ES: ["profunda", "profundo"],
    },
    "moderate": {
        EN: ["moderate", "medium"],
        HI: ["मध्यम"],
        ES: ["moderada", "moderado"],
    },
    "incipient": {
        EN: ["incipient", "early", "initial", "white spot"],
        HI: ["प्रारंभिक", "शुरुआती"],
        ES: ["incipiente", "inicial", "temprana"],
    },
    "rampant": {
        EN: ["rampant", "widespread", "multiple cavities"],
        HI: ["व्यापक", "फैली हुई"],
        ES: ["rampante", "generalizada"],
    },
    "root_caries": {
        EN: ["root caries", "root surface caries", "cervical caries", "root decay"],
        HI: ["जड़ की सड़न"],
        ES: ["caries radicular", "caries de raíz"],
    },
    "recurrent": {
        EN: ["recurrent", "secondary", "under the filling", "around the filling"],
        HI: ["दोबारा", "फिलिंग के नीचे"],
        ES: ["recurrente", "secundaria"],
    },
    "abscess": {
        EN: ["abscess", "pus discharge", "draining pus", "gum boil"],
        HI: ["फोड़ा", "मवाद"],
        ES: ["absceso", "flemón"],
    },
    "pulpitis": {
        EN: ["pulpitis", "pulp inflammation", "inflamed pulp"],
        HI: ["पल्पाइटिस", "नस में सूजन"],
        ES: ["pulpitis", "pulpa inflamada"],
    },
    "irreversible": {
        EN: ["irreversible"],
        HI: ["अपरिवर्तनीय"],
        ES: ["irreversible"],
    },
    "reversible": {
        EN: ["reversible"],
        HI: ["प्रतिवर्ती"],
        ES: ["reversible"],
    },
    "necrosis": {
        EN: ["necrosis", "necrotic", "non-vital", "nonvital", "dead tooth", "dead nerve"],
        HI: ["परिगलन", "मृत दांत", "नस मर गई"],
        ES: ["necrosis", "necrótico", "necrótica", "diente muerto"],
    },
    "fracture": {
        EN: ["fracture", "fractured", "cracked", "crack", "chipped", "broken tooth", "tooth is broken"],
        HI: ["टूटा", "टूट गया", "दरार"],
        ES: ["fractura", "fracturado", "diente roto", "agrietado"],
    },
    "root_fracture": {
        EN: ["root fracture", "fractured root", "vertical root fracture", "fracture of the root"],
        HI: ["जड़ में दरार", "जड़ टूटी"],
        ES: ["fractura radicular", "fractura de raíz"],
    },
    "extraction": {
        EN: ["extraction", "extract it", "extract the tooth", "to be extracted", "pull it out", "pull out", "take it out", "remove the tooth"],
        HI: ["निकालना", "निकाल", "उखाड़"],
        ES: ["extracción", "extraer", "sacar el diente"],
    },
    "root_canal": {
        EN: ["root canal", "rct", "endodontic"],
        HI: ["रूट कैनाल"],
        ES: ["endodoncia", "tratamiento de conducto"],
    },
    "completed": {
        EN: ["already", "done", "previous", "previously", "treated", "completed", "existing"],
        HI: ["पहले", "हो चुका", "पुराना"],
        ES: ["previo", "previa", "realizado", "antiguo"],
    },
    "filling": {
        EN: ["filling", "filled", "restoration", "composite", "amalgam"],
        HI: ["फिलिंग", "भराव"],
        ES: ["empaste", "obturación", "restauración", "resina"],
    },
    "crown": {
        EN: ["crown", "dental cap", "onlay"],
        HI: ["क्राउन", "कैप"],
        ES: ["corona", "funda"],
    },
    "defective": {
        EN: ["defective", "leaking", "failed", "loose", "fell out", "came off", "broken"],
        HI: ["खराब", "ढीला", "निकल गया"],
        ES: ["defectuosa", "defectuoso", "filtrada", "suelta", "se cayó"],
    },
    "needed": {
        EN: ["needs", "need a", "requires", "required", "recommend", "indicated", "planned"],
        HI: ["ज़रूरत", "जरूरत", "लगाना होगा"],
        ES: ["necesita", "requiere", "indicado", "indicada"],
    },
    "missing": {
        EN: ["missing", "absent", "edentulous", "already extracted", "was extracted"],
        HI: ["गायब", "दांत नहीं है"],
        ES: ["ausente", "falta el diente", "perdido"],
    },
    "gingivitis": {
        EN: ["gingivitis", "gum inflammation", "inflamed gums"],
        HI: ["मसूड़ों में सूजन", "जिंजिवाइटिस"],
        ES: ["gingivitis", "encías inflamadas"],
    },
    "periodontitis": {
        EN: ["periodontitis", "periodontal disease", "periodontal pocket", "pocket depth", "bone loss"],
        HI: ["पायरिया", "पेरियोडोंटाइटिस"],
        ES: ["periodontitis", "enfermedad periodontal", "bolsa periodontal"],
    },
    "aggressive": {
        EN: ["aggressive", "rapid", "juvenile"],
        HI: ["आक्रामक", "तेजी से"],
        ES: ["agresiva", "rápida"],
    },
    "hypersensitivity": {
        EN: ["hypersensitivity", "hypersensitive", "dentin sensitivity", "dentinal sensitivity"],
        HI: ["अतिसंवेदनशीलता"],
        ES: ["hipersensibilidad"],
    },
    # Symptom concepts
    "pain": {
        EN: ["pain", "painful", "ache", "aching", "hurt", "hurts", "sore"],
        HI: ["दर्द", "पीड़ा"],
        ES: ["dolor", "duele", "molestia"],
    },
    "sharp": {
        EN: ["sharp", "stabbing"],
        HI: ["तेज़", "तेज", "चुभन"],
        ES: ["agudo", "punzante"],
    },
    "dull": {
        EN: ["dull"],
        HI: ["हल्का दर्द", "धीमा"],
        ES: ["sordo"],
    },
    "throbbing": {
        EN: ["throbbing", "pulsating", "pounding"],
        HI: ["धड़कन", "टीस"],
        ES: ["pulsátil", "palpitante"],
    },
    "shooting": {
        EN: ["shooting", "radiating"],
        HI: ["फैलता"],
        ES: ["irradiado", "fulgurante"],
    },
    "lingering": {
        EN: ["lingering", "lingers", "persists", "stays for"],
        HI: ["देर तक"],
        ES: ["persistente", "prolongado"],
    },
    "spontaneous": {
        EN: ["spontaneous", "on its own", "without reason", "at night"],
        HI: ["अपने आप", "रात में"],
        ES: ["espontáneo", "espontaneo", "por la noche"],
    },
    "cold": {
        EN: ["cold", "icy", "ice cream", "chilled"],
        HI: ["ठंडा", "ठंडे", "ठंडी"],
        ES: ["frío", "frio", "helado"],
    },
    "hot": {
        EN: ["hot", "heat", "warm"],
        HI: ["गर्म", "गरम"],
        ES: ["caliente", "calor"],
    },
    "sweet": {
        EN: ["sweet", "sugar", "sugary"],
        HI: ["मीठा", "मीठे", "मिठाई"],
        ES: ["dulce", "azúcar"],
    },
    "chewing": {
        EN: ["chewing", "biting", "bite", "chew"],
        HI: ["चबाने", "चबाते"],
        ES: ["masticar", "morder"],
    },
    "swelling": {
        EN: ["swelling", "swollen"],
        HI: ["सूजन"],
        ES: ["hinchazón", "inflamación", "hinchado"],
    },
    "bleeding": {
        EN: ["bleeding", "bleeds"],
        HI: ["खून", "रक्तस्राव"],
        ES: ["sangrado", "sangran", "sangra"],
    },
    "sensitive": {
        EN: ["sensitive", "sensitivity"],
        HI: ["संवेदनशील", "झनझनाहट", "सेंसिटिव"],
        ES: ["sensible", "sensibilidad"],
    },
    "mobility": {
        EN: ["mobile", "mobility", "wobbly", "shaky", "loose tooth"],
        HI: ["हिलता", "हिल रहा"],
        ES: ["movilidad", "se mueve", "flojo"],
    },
}


def keywords_for(concept: str) -> Tuple[str, ...]:
    """All surface forms for a concept across locales, in table order."""
    by_locale = CONCEPT_KEYWORDS[concept]
    return tuple(keyword for keywords in by_locale.values() for keyword in keywords)


def matches(window: str, concept: Union[str, Iterable[str]]) -> bool:
    """True if any keyword of the concept occurs in the (lower-cased) window.

    ``concept`` is either a concept name from ``CONCEPT_KEYWORDS`` or an
    explicit keyword collection.
    """
    keywords = keywords_for(concept) if isinstance(concept, str) else tuple(concept)
    return any(keyword in window for keyword in keywords)


def matches_any(window: str, concepts: Iterable[str]) -> bool:
    return any(matches(window, concept) for concept in concepts)


def supported_locales() -> List[str]:
    locales: List[str] = []
    for by_locale in CONCEPT_KEYWORDS.values():
        for locale in by_locale:
            if locale not in locales:
                locales.append(locale)
    return locales
