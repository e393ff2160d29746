"""Recursive-descent parser for the Quill language.

Precedence, lowest to highest:

    statement        let/const declaration, fn declaration, comment, expression
    assignment       object_or_additive ('=' assignment)?
    object           '{' properties '}' | additive
    additive         multiplicative (('+' | '-') multiplicative)*
    multiplicative   call_member (('*' | '/' | '%') call_member)*
    call_member      member ('(' args ')')*
    member           primary ('.' IDENT | '[' expression ']')*
    primary          IDENT | NUMBER | '(' expression ')'

The first error aborts the whole parse; there is no recovery. Nesting of
expressions and function declarations is capped at `MAX_NESTING_DEPTH`
levels so that deep input fails with `NestingTooDeep` instead of exhausting
the Python stack.
"""

from __future__ import annotations

from typing import List

from .ast import (
    Program, NumericLiteral, Identifier, Comment, Property, ObjectLiteral,
    VarDeclaration, FnDeclaration, AssignmentExpr, MemberExpr, CallExpr,
    BinaryExpr, Node,
)
from .errors import (
    ExpectedToken, UnexpectedEndOfInput, UnsupportedTokenType,
    NoDotOperatorWithoutRhsIdentifier, ConstValueRequired,
    ExpectedParameterToBeIdentifier, NestingTooDeep,
)
from .lexer import tokenize
from .tokens import Token, TokenType

# Each level costs about ten Python frames on the way down the ladder.
MAX_NESTING_DEPTH = 50


class Parser:
    def __init__(self, max_depth: int = MAX_NESTING_DEPTH):
        self.tokens: List[Token] = []
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    def produce_ast(self, source: str) -> Program:
        """Tokenize and parse `source` into a Program."""
        self.tokens = tokenize(source)
        self.pos = 0
        self.depth = 0
        program = Program([])
        try:
            while not self.match(TokenType.EOF):
                if self.match(TokenType.SEMICOLON):
                    self.consume(TokenType.SEMICOLON, "empty statement")
                    continue
                program.body.append(self.parse_statement())
        except RecursionError:
            raise NestingTooDeep(self.max_depth) from None
        return program

    def enter(self):
        self.depth += 1
        if self.depth > self.max_depth:
            raise NestingTooDeep(self.max_depth)

    def leave(self):
        self.depth -= 1

    # Token stream helpers

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        # EOF is never stepped over
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, token_type: TokenType, value: str = None) -> bool:
        token = self.peek()
        if token.type != token_type:
            return False
        return value is None or token.value == value

    def consume(self, token_type: TokenType, context: str) -> Token:
        token = self.peek()
        if token.type != token_type:
            if token.type == TokenType.EOF:
                raise UnexpectedEndOfInput(context)
            raise ExpectedToken(token_type, token, context)
        return self.advance()

    # Statements

    def parse_statement(self) -> Node:
        token = self.peek()
        if token.type == TokenType.COMMENT:
            self.advance()
            return Comment(token.value)
        if token.type == TokenType.FN:
            stmt = self.parse_fn_declaration()
            # the closing brace already ends the statement
            if self.match(TokenType.SEMICOLON):
                self.advance()
            return stmt
        if token.type in (TokenType.LET, TokenType.CONST):
            stmt = self.parse_var_declaration()
        else:
            stmt = self.parse_expression()
        self.parse_terminator()
        return stmt

    def parse_terminator(self):
        # The last statement of a block or of the input may omit its ';'.
        if self.match(TokenType.RIGHT_BRACE) or self.match(TokenType.EOF):
            return
        self.consume(TokenType.SEMICOLON, "expected ';' after statement")

    def parse_var_declaration(self) -> VarDeclaration:
        keyword = self.advance()
        constant = keyword.type == TokenType.CONST
        name = self.consume(TokenType.IDENTIFIER, "expected identifier name after let or const").value
        # no initializer wherever the statement may end
        if self.match(TokenType.SEMICOLON) or self.match(TokenType.RIGHT_BRACE) or self.match(TokenType.EOF):
            if constant:
                raise ConstValueRequired(name)
            return VarDeclaration(constant, name, None)
        self.consume(TokenType.EQUALS, f"expected '=' after identifier {name}")
        return VarDeclaration(constant, name, self.parse_expression())

    def parse_fn_declaration(self) -> FnDeclaration:
        self.enter()
        try:
            return self.parse_fn_parts()
        finally:
            self.leave()

    def parse_fn_parts(self) -> FnDeclaration:
        self.consume(TokenType.FN, "expected fn keyword")
        name = self.consume(TokenType.IDENTIFIER, "expected function name following fn keyword").value
        parameters: List[str] = []
        for arg in self.parse_args():
            if not isinstance(arg, Identifier):
                raise ExpectedParameterToBeIdentifier(arg)
            parameters.append(arg.symbol)
        self.consume(TokenType.LEFT_BRACE, "expected function body following declaration")
        body: List[Node] = []
        while not self.match(TokenType.RIGHT_BRACE) and not self.match(TokenType.EOF):
            if self.match(TokenType.SEMICOLON):
                self.advance()
                continue
            body.append(self.parse_statement())
        self.consume(TokenType.RIGHT_BRACE, f"closing brace expected at the end of function {name}")
        return FnDeclaration(name, parameters, body, is_const=False)

    # Expressions

    def parse_expression(self) -> Node:
        return self.parse_assignment()

    def parse_assignment(self) -> Node:
        # every nested expression passes through here
        self.enter()
        try:
            left = self.parse_object()
            if self.match(TokenType.EQUALS):
                self.advance()
                value = self.parse_assignment()
                return AssignmentExpr(left, value)
            return left
        finally:
            self.leave()

    def parse_object(self) -> Node:
        # { foo: 1, bar, baz: { z: true }, }
        if not self.match(TokenType.LEFT_BRACE):
            return self.parse_additive()
        self.advance()
        properties: List[Property] = []
        while not self.match(TokenType.RIGHT_BRACE) and not self.match(TokenType.EOF):
            key = self.consume(TokenType.IDENTIFIER, "object literal key expected").value
            if self.match(TokenType.COMMA):
                self.advance()
                properties.append(Property(key, None))
                continue
            if self.match(TokenType.RIGHT_BRACE):
                properties.append(Property(key, None))
                continue
            self.consume(TokenType.COLON, f"missing colon after key {key} in object literal")
            properties.append(Property(key, self.parse_expression()))
            if not self.match(TokenType.RIGHT_BRACE):
                self.consume(TokenType.COMMA, "expected ',' or '}' after property")
        self.consume(TokenType.RIGHT_BRACE, "object literal is missing a closing brace")
        return ObjectLiteral(properties)

    def parse_additive(self) -> Node:
        left = self.parse_multiplicative()
        while self.match(TokenType.BINARY_OPERATOR, '+') or self.match(TokenType.BINARY_OPERATOR, '-'):
            operator = self.advance().value
            right = self.parse_multiplicative()
            left = BinaryExpr(left, right, operator)
        return left

    def parse_multiplicative(self) -> Node:
        left = self.parse_call_member()
        while self.peek().type == TokenType.BINARY_OPERATOR and self.peek().value in ('*', '/', '%'):
            operator = self.advance().value
            right = self.parse_call_member()
            left = BinaryExpr(left, right, operator)
        return left

    def parse_call_member(self) -> Node:
        node = self.parse_member()
        # chained calls: f()()
        while self.match(TokenType.LEFT_PAREN):
            node = CallExpr(node, self.parse_args())
        return node

    def parse_args(self) -> List[Node]:
        self.consume(TokenType.LEFT_PAREN, "expected open parenthesis")
        args: List[Node] = []
        if not self.match(TokenType.RIGHT_PAREN):
            args.append(self.parse_assignment())
            while self.match(TokenType.COMMA):
                self.advance()
                args.append(self.parse_assignment())
        self.consume(TokenType.RIGHT_PAREN, "missing closing parenthesis in argument list")
        return args

    def parse_member(self) -> Node:
        obj = self.parse_primary()
        while self.match(TokenType.DOT) or self.match(TokenType.LEFT_BRACKET):
            operator = self.advance()
            if operator.type == TokenType.DOT:
                prop = self.parse_primary()
                if not isinstance(prop, Identifier):
                    raise NoDotOperatorWithoutRhsIdentifier()
                obj = MemberExpr(obj, prop, computed=False)
            else:
                prop = self.parse_expression()
                self.consume(TokenType.RIGHT_BRACKET, "missing closing bracket in computed member expression")
                obj = MemberExpr(obj, prop, computed=True)
        return obj

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.type == TokenType.EOF:
            raise UnexpectedEndOfInput("expected an expression")
        self.advance()
        if token.type == TokenType.IDENTIFIER:
            return Identifier(token.value)
        if token.type == TokenType.NUMBER:
            return NumericLiteral(token.value)
        if token.type == TokenType.LEFT_PAREN:
            expr = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, "no right paren inside expression")
            return expr
        raise UnsupportedTokenType(token)


def parse_program(source: str) -> Program:
    """Parse the given source code into a Program AST."""
    return Parser().produce_ast(source)
