from typing import TypeAlias

ModuleName: TypeAlias = str
TypeName: TypeAlias = str
RenameMap: TypeAlias = dict[TypeName, TypeName]
SubstitutionMap: TypeAlias = dict[TypeName, TypeName]
