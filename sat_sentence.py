import numpy as np
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, TextIO, Tuple
import logging

from sat_errors import DimacsParseError, ResourceLimitError

logger = logging.getLogger(__name__)

# lines starting with these are comments or headers in .cnf files
COMMENT_MARKERS = ("c", "p", "#")
# SATLIB files close the clause list with "%" followed by a lone "0"
END_MARKER = "%"


Clause = Tuple[int, ...]


@dataclass(frozen=True)
class SATSentence:
    """A CNF sentence: a conjunction of clauses, each a disjunction of literals.

    A literal is a nonzero int. abs(lit) is the 1-based variable id and the
    sign is the value the variable needs for the literal to hold. Clauses are
    stored as tuples and the sentence is frozen, so it cannot change after
    construction.
    """
    clauses: Tuple[Clause, ...] = field(default_factory=tuple)

    def __post_init__(self):
        clauses = tuple(tuple(clause) for clause in self.clauses)
        for i, clause in enumerate(clauses):
            if not clause:
                raise ValueError(f"clause {i} is empty")
            if any(lit == 0 for lit in clause):
                raise ValueError(f"clause {i} ({list(clause)}) contains the literal 0")
        object.__setattr__(self, "clauses", clauses)

    @property
    def num_clauses(self) -> int:
        return len(self.clauses)

    def num_variables(self) -> int:
        """Largest variable id referenced by any literal (0 for an empty sentence)."""
        max_var = 0
        for clause in self.clauses:
            for lit in clause:
                max_var = max(max_var, abs(lit))
        return max_var

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    @classmethod
    def from_ksat(cls, literals: Sequence[int], num_clauses: Optional[int] = None,
                  k: int = 3) -> "SATSentence":
        """Split a flat literal sequence into clauses of k literals each."""
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")
        if num_clauses is None:
            if len(literals) % k:
                raise ValueError(f"{len(literals)} literals do not split into clauses of {k}")
            num_clauses = len(literals) // k
        elif len(literals) < num_clauses * k:
            raise ValueError(
                f"{num_clauses} clauses of {k} literals need {num_clauses * k} literals, "
                f"got {len(literals)}")

        clauses = [list(literals[k * i:k * (i + 1)]) for i in range(num_clauses)]
        return cls(clauses)

    @classmethod
    def from_dimacs(cls, lines: Iterable[str]) -> "SATSentence":
        """
        Parse a DIMACS (.cnf) sentence.

        A 0 closes the current clause, so one clause may span several lines and
        literals still pending at the end of input form a last clause. The
        "p cnf" header is not checked against the clauses.
        """
        clauses: List[List[int]] = []
        pending: List[int] = []
        line_no = 0

        for line_no, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith(COMMENT_MARKERS):
                continue
            if line.startswith(END_MARKER):
                break

            for token in line.split():
                try:
                    lit = int(token)
                except ValueError:
                    raise DimacsParseError(line_no, line, f"bad literal {token!r}") from None
                if lit != 0:
                    pending.append(lit)
                    continue
                if not pending:
                    raise DimacsParseError(line_no, line)
                clauses.append(pending)
                pending = []

        if pending:
            clauses.append(pending)

        logger.debug("Parsed %d clauses from %d lines", len(clauses), line_no)
        return cls(clauses)

    @classmethod
    def read_dimacs(cls, path: str) -> "SATSentence":
        with open(path, encoding="utf-8") as f:
            return cls.from_dimacs(f)

    @classmethod
    def random_ksat(cls, num_clauses: int, num_variables: int, seed: str = "",
                    k: int = 3) -> "SATSentence":
        """
        Generate a random k-SAT sentence from a seed string.

        Every literal gets a variable in [1, num_variables] and a random sign.
        Afterwards clause i (for i < num_variables) has its first literal
        replaced by variable i+1 with a fresh sign, so no variable is missing.
        The stream comes from the raw output of a PCG64 bit generator, which
        numpy keeps stable across releases, so a seed always gives the same
        sentence.
        """
        if num_clauses <= 0 or num_variables <= 0 or k <= 0:
            raise ValueError(
                f"clauses ({num_clauses}), variables ({num_variables}) and k ({k}) "
                "must all be positive")
        if num_variables > num_clauses:
            raise ResourceLimitError(
                f"number of clauses ({num_clauses}) must be at least "
                f"the number of variables ({num_variables})")

        entropy = int.from_bytes(seed.encode("utf-8"), "little")
        bitgen = np.random.PCG64(np.random.SeedSequence(entropy))

        def draw_var() -> int:
            return 1 + int(bitgen.random_raw()) % num_variables

        def draw_sign() -> int:
            return -1 if int(bitgen.random_raw()) >> 63 else 1

        clauses = []
        for _ in range(num_clauses):
            clause = []
            for _ in range(k):
                var = draw_var()
                clause.append(var * draw_sign())
            clauses.append(clause)

        for i in range(num_variables):
            clauses[i][0] = (i + 1) * draw_sign()

        logger.debug("Generated random %d-SAT sentence: %d clauses, %d variables, seed %r",
                     k, num_clauses, num_variables, seed)
        return cls(clauses)

    # ------------------------------------------------------------------
    # evaluation
    # ------------------------------------------------------------------

    def literal_bits(self, n: int, wrap_assignments: bool = True) -> List[List[Tuple[int, bool]]]:
        """
        Resolve every clause to (bit index, required value) pairs for an n-bit assignment.

        Variable v reads bit v % n. With wrap_assignments every variable folds
        onto the n bits; without it only variables v < n take part and the
        rest are dropped from their clause.
        """
        if n <= 0:
            if self.clauses:
                raise ValueError(f"assignment width must be positive, got {n}")
            return []

        resolved = []
        for clause in self.clauses:
            bits = []
            for lit in clause:
                var = abs(lit)
                if not wrap_assignments and var >= n:
                    continue
                bits.append((var % n, lit > 0))
            resolved.append(bits)
        return resolved

    def evaluate(self, assignment: int, n: int, wrap_assignments: bool = True) -> bool:
        """True iff the n-bit assignment satisfies every clause."""
        for clause in self.literal_bits(n, wrap_assignments):
            if not any(((assignment >> bit) & 1) == value for bit, value in clause):
                return False
        return True

    def n_unsatisfied_clauses(self, assignment: int, n: int, wrap_assignments: bool = True) -> int:
        """Number of clauses with no literal satisfied by the n-bit assignment."""
        unsatisfied = 0
        for clause in self.literal_bits(n, wrap_assignments):
            if not any(((assignment >> bit) & 1) == value for bit, value in clause):
                unsatisfied += 1
        return unsatisfied

    def count_unsatisfied_batch(self, assignments: np.ndarray, n: int,
                                wrap_assignments: bool = True,
                                literal_bits: Optional[List[List[Tuple[int, bool]]]] = None) -> np.ndarray:
        """n_unsatisfied_clauses over an array of assignments at once."""
        if literal_bits is None:
            literal_bits = self.literal_bits(n, wrap_assignments)
        a = np.asarray(assignments, dtype=np.int64)
        unsatisfied = np.zeros(a.shape, dtype=np.int64)
        if not literal_bits:
            return unsatisfied

        # one boolean plane per assignment bit
        planes = [((a >> b) & 1).astype(bool) for b in range(n)]
        for clause in literal_bits:
            satisfied = np.zeros(a.shape, dtype=bool)
            for bit, value in clause:
                satisfied |= planes[bit] if value else ~planes[bit]
            unsatisfied += ~satisfied
        return unsatisfied

    # ------------------------------------------------------------------
    # output
    # ------------------------------------------------------------------

    def to_dimacs(self, stream: TextIO, comment: str = ""):
        """Write the sentence in DIMACS (.cnf) format."""
        if comment:
            for line in comment.splitlines():
                stream.write(f"c {line}\n")
        stream.write(f"p cnf {self.num_variables()} {self.num_clauses}\n")
        for clause in self.clauses:
            stream.write(" ".join(str(lit) for lit in clause) + " 0\n")

    def write_dimacs(self, path: str, comment: str = ""):
        with open(path, "w", encoding="utf-8") as f:
            self.to_dimacs(f, comment)
        logger.info("Wrote %d clauses to %s", self.num_clauses, path)

    def __str__(self) -> str:
        return "".join("(" + "".join(f"{lit:4d}" for lit in clause) + ") "
                       for clause in self.clauses)
