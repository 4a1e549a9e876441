"""Static subject taxonomy: labels, scoring keywords and answer synonyms.

Tables are built once at import and exposed read-only. Iteration order of
every mapping follows the `Subject` declaration order, which is also the
tie-break order for heuristic scoring.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from notes_maker.core.models.note import Subject

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

SUBJECTS: tuple[Subject, ...] = tuple(Subject)

_RAW_KEYWORDS: dict[Subject, list[str]] = {
    Subject.MATHEMATICS: [
        "integral", "derivative", "algebra", "calculus", "theorem", "matrix", "probability", "geometry",
        "trigonometry", "statistics", "differential equations", "vector", "tensor", "limit", "set theory",
        "number theory", "topology", "combinatorics", "prime", "logarithm", "exponential", "polynomial",
        "inequality", "function", "graph theory", "optimization", "linear algebra", "stochastic",
        "random variable", "bayesian", "euclidean", "non-euclidean", "metric", "proof", "axiom", "lemma",
        "corollary", "sequence", "series", "p-adic", "symmetry", "group theory", "ring", "field",
        "manifold", "integrable", "partial derivative", "gradient", "divergence", "curl",
    ],
    Subject.PHYSICS: [
        "velocity", "force", "quantum", "relativity", "particle", "energy", "momentum", "thermodynamics",
        "optics", "mass", "acceleration", "friction", "gravity", "electromagnetism", "wave", "frequency",
        "amplitude", "spin", "string theory", "boson", "fermion", "neutrino", "photon", "entropy",
        "enthalpy", "pressure", "fluid dynamics", "nuclear", "atomic", "collision", "radiation",
        "magnetism", "capacitance", "resistance", "superconductivity", "black hole", "cosmology",
        "astrophysics", "inertia", "scalar", "vector", "field", "higgs", "dark matter", "dark energy",
        "interference", "diffraction", "relativistic",
    ],
    Subject.CHEMISTRY: [
        "molecule", "reaction", "chemical", "atom", "bond", "ph", "acid", "oxidation", "synthesis",
        "catalyst", "organic", "inorganic", "covalent", "ionic", "solution", "solvent", "solute",
        "concentration", "stoichiometry", "thermochemistry", "enthalpy", "electrons", "orbitals",
        "periodic table", "isotope", "polymer", "crystal", "precipitate", "titration", "spectroscopy",
        "chromatography", "equilibrium", "buffer", "alkaline", "halogen", "transition metal",
        "electrochemistry", "redox", "molarity", "kinetics", "enthalpy", "hydrocarbon", "ester",
        "amine",
    ],
    Subject.BIOLOGY: [
        "cell", "organism", "evolution", "dna", "protein", "genome", "photosynthesis", "mitosis",
        "meiosis", "enzyme", "chromosome", "ribosome", "mutation", "gene", "genetics", "epigenetics",
        "ecosystem", "bacteria", "virus", "fungi", "microbe", "adaptation", "natural selection", "anatomy",
        "physiology", "immune system", "respiration", "metabolism", "hormone", "organ", "species",
        "taxonomy", "reproduction", "biosphere", "ecology", "biome", "cloning", "biotechnology", "neuron",
        "synapse", "membrane", "cytoplasm", "mitochondria", "chloroplast",
    ],
    Subject.PROGRAMMING: [
        "function", "variable", "loop", "algorithm", "code", "compile", "runtime", "bug", "debug",
        "class", "object", "inheritance", "polymorphism", "interface", "recursion", "pointer", "array",
        "list", "dictionary", "hashmap", "framework", "library", "module", "package", "thread",
        "concurrency", "parallel", "asynchronous", "promise", "exception", "error", "syntax",
        "interpreter", "compiler", "optimization", "API", "REST", "JSON", "XML", "version control", "git",
        "regex", "IDE", "container", "virtual machine",
    ],
    Subject.COMPUTER_SCIENCE: [
        "computer", "algorithm", "data structure", "database", "machine learning", "computing", "cpu",
        "gpu", "compiler theory", "operating system", "network", "protocol", "distributed system", "cloud",
        "virtualization", "encryption", "cryptography", "complexity", "big o", "neural network", "ai",
        "deep learning", "nlp", "data mining", "information theory", "storage", "cache", "parallelism",
        "graph", "tree", "binary", "hashing", "blockchain", "cybersecurity", "quantum computing",
        "software engineering", "microarchitecture",
    ],
    Subject.HISTORY: [
        "war", "empire", "revolution", "histor", "ancient", "medieval", "colonial", "civilization",
        "dynasty", "treaty", "monarchy", "republic", "conquest", "military", "battle", "renaissance",
        "industrial", "cold war", "world war", "enlightenment", "pharaoh", "archaeology", "imperialism",
        "feudalism", "constitution", "reform", "rebellion", "independence", "exploration", "migration",
        "cultural heritage", "chronicle", "historic event",
    ],
    Subject.GEOGRAPHY: [
        "continent", "country", "climate", "mountain", "river", "latitude", "longitude", "topography",
        "desert", "ocean", "island", "plate tectonics", "weather", "region", "urban", "rural",
        "population", "ecosystem", "rainforest", "volcano", "earthquake", "map", "cartography", "habitat",
        "biome", "altitude", "sea level", "landform", "delta", "canyon", "valley", "glacier",
    ],
    Subject.LITERATURE: [
        "novel", "poem", "poetry", "literature", "character", "narrative", "prose", "metaphor",
        "allegory", "symbolism", "theme", "plot", "drama", "tragedy", "comedy", "author", "genre",
        "fiction", "nonfiction", "myth", "legend", "epic", "short story", "rhetoric", "dialogue",
        "narrator", "memoir", "biography", "autobiography", "manuscript", "allusion", "satire", "imagery",
    ],
    Subject.LANGUAGE: [
        "grammar", "vocabulary", "sentence", "syntax", "linguistics", "translation", "phonetics",
        "phonology", "morphology", "semantics", "pragmatics", "dialect", "accent", "lexicon",
        "conjugation", "declension", "orthography", "writing system", "etymology", "discourse", "phrase",
        "idiom", "bilingual", "multilingual", "pronunciation",
    ],
    Subject.ART: [
        "painting", "sculpture", "canvas", "gallery", "museum", "visual", "aesthetics", "portrait",
        "landscape", "abstract", "expressionism", "realism", "surrealism", "impressionism", "installation",
        "performance art", "fine art", "brushstroke", "composition", "color theory", "perspective",
        "illustration", "sketch", "modern art", "contemporary art", "exhibit",
    ],
    Subject.MUSIC: [
        "melody", "harmony", "rhythm", "instrument", "composer", "song", "audio", "pitch", "tempo",
        "tone", "timbre", "scale", "chord", "genre", "orchestra", "symphony", "opera", "choir", "band",
        "beat", "lyrics", "arrangement", "composition", "improvisation", "acoustic", "electronic",
        "soundtrack", "mixing", "recording", "notation", "conductor", "performance",
    ],
    Subject.SPORTS: [
        "tournament", "score", "player", "match", "athlete", "game", "league", "championship", "coach",
        "training", "stadium", "team", "referee", "offense", "defense", "tactics", "strategy", "injury",
        "endurance", "competition", "sportsmanship", "record", "ranking", "event", "marathon", "sprint",
        "ball", "equipment", "playoff", "fitness",
    ],
    Subject.ENTERTAINMENT: [
        "movie", "film", "television", "celebrity", "show", "entertainment", "series", "episode",
        "director", "actor", "actress", "script", "screenplay", "animation", "cartoon", "streaming",
        "documentary", "thriller", "comedy", "drama", "action", "cinema", "franchise", "soundtrack",
        "visual effects", "special effects", "broadcast", "media", "trailer",
    ],
    Subject.GENERAL: [],
}

_RAW_SYNONYMS: list[tuple[str, Subject]] = [
    ("computer science", Subject.COMPUTER_SCIENCE),
    ("cs", Subject.COMPUTER_SCIENCE),
    ("coding", Subject.PROGRAMMING),
    ("programming", Subject.PROGRAMMING),
    ("program", Subject.PROGRAMMING),
    ("math", Subject.MATHEMATICS),
    ("mathematics", Subject.MATHEMATICS),
    ("physics", Subject.PHYSICS),
    ("chemistry", Subject.CHEMISTRY),
    ("biology", Subject.BIOLOGY),
    ("history", Subject.HISTORY),
    ("geography", Subject.GEOGRAPHY),
    ("literature", Subject.LITERATURE),
    ("language", Subject.LANGUAGE),
    ("linguistics", Subject.LANGUAGE),
    ("art", Subject.ART),
    ("music", Subject.MUSIC),
    ("sports", Subject.SPORTS),
    ("entertainment", Subject.ENTERTAINMENT),
    ("general", Subject.GENERAL),
]

_DESCRIPTIONS: dict[Subject, str] = {
    Subject.MATHEMATICS: "Math problems, equations",
    Subject.PHYSICS: "Concepts & laws",
    Subject.CHEMISTRY: "Reactions & compounds",
    Subject.BIOLOGY: "Living organisms",
    Subject.PROGRAMMING: "Code & algorithms",
    Subject.COMPUTER_SCIENCE: "CS concepts",
    Subject.HISTORY: "Events & figures",
    Subject.GEOGRAPHY: "Maps & places",
    Subject.LITERATURE: "Books & analysis",
    Subject.LANGUAGE: "Grammar & vocab",
    Subject.ART: "Visual arts",
    Subject.MUSIC: "Theory & composers",
    Subject.SPORTS: "Athletic activities",
    Subject.ENTERTAINMENT: "Movies & celebrities",
    Subject.GENERAL: "Miscellaneous",
}


def _normalize_keywords(keywords: Iterable[str]) -> tuple[str, ...]:
    """Lower-case keywords, keeping order and repeats.

    A keyword listed twice counts twice when scoring.
    """
    return tuple(kw.strip().lower() for kw in keywords if kw.strip())


SUBJECT_KEYWORDS: Mapping[Subject, tuple[str, ...]] = MappingProxyType(
    {subject: _normalize_keywords(_RAW_KEYWORDS[subject]) for subject in SUBJECTS}
)

SUBJECT_SYNONYMS: Mapping[str, Subject] = MappingProxyType(dict(_RAW_SYNONYMS))

SUBJECT_DESCRIPTIONS: Mapping[Subject, str] = MappingProxyType(_DESCRIPTIONS)


def subject_catalog() -> list[dict[str, str]]:
    """Return label/description pairs in taxonomy order."""
    return [
        {"subject": subject.value, "description": SUBJECT_DESCRIPTIONS[subject]}
        for subject in SUBJECTS
    ]
