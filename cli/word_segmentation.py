def break_into_words(type_name: str) -> list[str]:
    """Split a PascalCase identifier into its words, keeping acronyms together.

    `GRPCRouteRulesBackendRef` becomes `["GRPC", "Route", "Rules", "Backend", "Ref"]`.

    The scan looks at three characters at a time and stops two characters
    short of the end; those last two characters always close the final word.
    Identifiers of one or two characters are a single word.
    """
    words: list[str] = []
    current_word = ""

    for current, next_char, next_next in zip(type_name, type_name[1:], type_name[2:]):
        if current.isupper():
            current_word += current
            if next_char.isupper() and not next_next.isupper():
                # End of an acronym run: `next_char` starts a capitalized word.
                words.append(current_word)
                current_word = ""
        else:
            current_word += current
            if next_char.isupper():
                words.append(current_word)
                current_word = ""

    if len(type_name) > 2:
        current_word += type_name[-2:]
        words.append(current_word)
    else:
        words.append(type_name)

    return words


def common_words(word_lists: list[list[str]]) -> list[str]:
    """Words present in every list, in lexicographic order."""
    if not word_lists:
        return []

    intersection = set(word_lists[0])
    for words in word_lists[1:]:
        intersection &= set(words)
    return sorted(intersection)
